from rest_framework import viewsets, permissions, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from scholarspace.action_logs.models.action_log import ActionLog, ActionCategory
from scholarspace.action_logs.serializers.action_log import ActionLogSerializer
from scholarspace.users.permissions.permission import IsSchoolAdmin


class ActionLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Audit trail of report card operations.
    School administrators see the entries made by their own school's users.
    """

    queryset = (
        ActionLog.objects.all()
        .select_related("user", "content_type")
        .order_by("-timestamp")
    )
    serializer_class = ActionLogSerializer
    permission_classes = [permissions.IsAuthenticated, IsSchoolAdmin]
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]

    filterset_fields = {
        "user_tag": ["exact"],
        "category": ["exact"],
        "content_type__model": ["exact"],
        "object_id": ["exact"],
        "timestamp": ["gte", "lte"],
    }

    search_fields = [
        "action",
        "user__username",
        "user__email",
    ]

    ordering_fields = ["timestamp"]
    ordering = ["-timestamp"]

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if user.is_superuser:
            return queryset
        if not user.school_id:
            return queryset.none()
        # Entries made by members of the admin's own school
        return queryset.filter(user__school_id=user.school_id)

    @action(detail=False, methods=["get"])
    def category_options(self, request):
        """Get available category options"""
        return Response(ActionCategory.choices)

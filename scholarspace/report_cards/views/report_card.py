import csv
import logging
from django.conf import settings
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, mixins, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from scholarspace.report_cards.models.report_card import ReportCard, ReportCardGrade
from scholarspace.report_cards.serializers.report_card import (
    ReportCardSerializer,
    ReportCardGradeSerializer,
    ReportCardUpdateSerializer,
    SubjectCommentSerializer,
    CohortSerializer,
    GenerateReportCardsSerializer,
    UpdateStatusSerializer,
)
from scholarspace.report_cards.exceptions import (
    ReportCardError,
    ClassNotFound,
    ReportCardsNotFound,
)
from scholarspace.schools.models.schoolclass import SchoolClass
from scholarspace.report_cards.utils import workflow
from scholarspace.report_cards.utils.generator import generate_report_cards
from scholarspace.report_cards.utils.tasks import generate_report_cards_task
from scholarspace.action_logs.utils.action_log import log_action
from scholarspace.action_logs.models.action_log import ActionCategory
from scholarspace.users.models.base_user import User
from scholarspace.users.models.parent import ParentStudentLink
from scholarspace.users.permissions.permission import (
    IsSchoolAdmin,
    IsSchoolStaff,
    IsStudentOrParent,
    IsSubjectTeacherOrAdmin,
    IsTeacher,
)

logger = logging.getLogger(__name__)


def error_response(exc):
    return Response(exc.as_response_data(), status=exc.status_code)


class ReportCardViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = ReportCard.objects.select_related(
        "student", "school_class", "form"
    ).prefetch_related("grades")
    serializer_class = ReportCardSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["school_class", "academic_year", "term", "status", "student"]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_permissions(self):
        if self.action == "mine":
            return [IsStudentOrParent()]
        if self.action in ["list", "retrieve", "export"]:
            return [IsSchoolStaff()]
        return [permissions.IsAuthenticated(), IsSchoolAdmin()]

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if not user.is_superuser:
            if not user.school_id:
                return queryset.none()
            queryset = queryset.filter(school_class__school_id=user.school_id)
        return queryset.order_by("class_rank", "id")

    def check_class_access(self, class_id):
        """Classes of other schools are reported as missing"""
        user = self.request.user
        if user.is_superuser:
            return
        if not SchoolClass.objects.filter(
            id=class_id, school_id=user.school_id
        ).exists():
            raise ClassNotFound(f"Class {class_id} not found")

    def partial_update(self, request, *args, **kwargs):
        card = self.get_object()
        serializer = ReportCardUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            card = workflow.update_report_card(
                card.id, serializer.validated_data, actor=request.user
            )
        except ReportCardError as e:
            return error_response(e)
        return Response(ReportCardSerializer(card).data)

    def update(self, request, *args, **kwargs):
        # Only partial edits of the admin comment fields are supported
        return self.partial_update(request, *args, **kwargs)

    @action(detail=False, methods=["post"])
    def generate(self, request):
        serializer = GenerateReportCardsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            self.check_class_access(data["class_id"])
        except ReportCardError as e:
            return error_response(e)

        run_async = data.get("run_async")
        if run_async is None:
            run_async = settings.REPORT_CARDS_RUN_ASYNC

        if run_async:
            task = generate_report_cards_task.delay(
                data["class_id"], data["academic_year"], data["term"], request.user.id
            )
            return Response(
                {"task_id": task.id, "status": "queued"},
                status=status.HTTP_202_ACCEPTED,
            )

        try:
            result = generate_report_cards(
                data["class_id"],
                data["academic_year"],
                data["term"],
                generated_by=request.user,
            )
        except ReportCardError as e:
            logger.warning(f"Report card generation refused: {e.message}")
            return error_response(e)
        return Response(result, status=status.HTTP_201_CREATED)

    def _cohort_action(self, request, operation, result_key):
        serializer = CohortSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            self.check_class_access(data["class_id"])
            count = operation(
                data["class_id"], data["academic_year"], data["term"], actor=request.user
            )
        except ReportCardError as e:
            return error_response(e)
        return Response({result_key: count})

    @action(detail=False, methods=["post"], url_path="send-for-review")
    def send_for_review(self, request):
        return self._cohort_action(request, workflow.send_for_review, "updated")

    @action(detail=False, methods=["post"])
    def publish(self, request):
        return self._cohort_action(request, workflow.publish, "updated")

    @action(detail=False, methods=["post"], url_path="delete-drafts")
    def delete_drafts(self, request):
        return self._cohort_action(
            request, workflow.delete_draft_report_cards, "deleted"
        )

    @action(detail=False, methods=["post"], url_path="update-status")
    def update_status(self, request):
        serializer = UpdateStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        report_card_ids = serializer.validated_data["report_card_ids"]

        visible = set(
            self.get_queryset()
            .filter(id__in=report_card_ids)
            .values_list("id", flat=True)
        )
        hidden = [card_id for card_id in report_card_ids if card_id not in visible]
        if hidden:
            return error_response(ReportCardsNotFound(hidden))

        try:
            count = workflow.update_status(
                report_card_ids,
                serializer.validated_data["status"],
                actor=request.user,
            )
        except ReportCardError as e:
            return error_response(e)
        return Response({"updated": count})

    @action(detail=False, methods=["get"])
    def export(self, request):
        """Ranked cohort as CSV"""
        queryset = self.filter_queryset(self.get_queryset())
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = 'attachment; filename="report_cards.csv"'

        writer = csv.writer(response)
        writer.writerow(
            [
                "Rank",
                "Student",
                "Class",
                "Academic Year",
                "Term",
                "Overall Average",
                "Attendance %",
                "Status",
            ]
        )
        for card in queryset:
            writer.writerow(
                [
                    card.class_rank or "",
                    card.student.name,
                    card.school_class.class_name,
                    card.academic_year,
                    card.term,
                    "" if card.overall_average is None else card.overall_average,
                    ""
                    if card.attendance_percentage is None
                    else card.attendance_percentage,
                    card.status,
                ]
            )

        log_action(
            user=request.user,
            action=f"Exported {len(queryset)} report card(s)",
            category=ActionCategory.DOWNLOAD,
            metadata={"filters": request.query_params.dict()},
        )
        return response

    @action(detail=False, methods=["get"])
    def mine(self, request):
        """Published cards for a student, or for a parent's linked children"""
        user = request.user
        if user.user_type == User.PARENT:
            student_ids = ParentStudentLink.objects.filter(parent=user).values_list(
                "student_id", flat=True
            )
        else:
            student_ids = [user.id]

        cards = []
        for student_id in student_ids:
            cards.extend(workflow.get_report_cards_for_student(student_id))
        return Response(ReportCardSerializer(cards, many=True).data)


class ReportCardGradeViewSet(viewsets.GenericViewSet):
    queryset = ReportCardGrade.objects.select_related("report_card__school_class")
    serializer_class = ReportCardGradeSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if user.is_superuser:
            return queryset
        if not user.school_id:
            return queryset.none()
        return queryset.filter(report_card__school_class__school_id=user.school_id)

    def get_permissions(self):
        if self.action == "review":
            return [IsTeacher()]
        return [IsSubjectTeacherOrAdmin()]

    @action(detail=True, methods=["patch"])
    def comment(self, request, pk=None):
        grade = get_object_or_404(self.get_queryset(), pk=pk)
        self.check_object_permissions(request, grade)

        serializer = SubjectCommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            # Only the fields sent are changed; an explicit null clears
            changes = {
                field: "" if value is None else value
                for field, value in serializer.validated_data.items()
            }
            grade = workflow.update_subject_comment(
                grade.id, actor=request.user, **changes
            )
        except ReportCardError as e:
            return error_response(e)
        return Response(ReportCardGradeSerializer(grade).data)

    @action(detail=False, methods=["get"])
    def review(self, request):
        return Response(workflow.get_teacher_review_cards(request.user.id))

from rest_framework import serializers
from scholarspace.action_logs.models.action_log import ActionLog
from scholarspace.users.serializers.base_user import BaseUserSerializer


class ActionLogSerializer(serializers.ModelSerializer):
    user_details = BaseUserSerializer(source="user", read_only=True)
    affected_model = serializers.ReadOnlyField()
    affected_object = serializers.ReadOnlyField()
    category_display = serializers.CharField(
        source="get_category_display", read_only=True
    )

    class Meta:
        model = ActionLog
        fields = [
            "id",
            "user",
            "user_details",
            "user_tag",
            "action",
            "category",
            "category_display",
            "content_type",
            "object_id",
            "affected_model",
            "affected_object",
            "metadata",
            "timestamp",
        ]
        read_only_fields = fields

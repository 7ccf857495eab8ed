from rest_framework import serializers
from scholarspace.users.models.base_user import User


class BaseUserSerializer(serializers.ModelSerializer):
    user_type = serializers.CharField(read_only=True)
    name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "name",
            "user_type",
            "user_tag",
        ]
        read_only_fields = ["id", "user_tag"]

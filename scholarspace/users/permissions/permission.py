from rest_framework.permissions import BasePermission, SAFE_METHODS
from scholarspace.users.models.base_user import User

# === BROAD ROLE CHECKS ===


class IsSchoolAdmin(BasePermission):
    """School owners and standalone administrators"""

    def has_permission(self, request, view):
        return request.user.is_authenticated and (
            request.user.is_superuser or request.user.is_school_admin
        )


class IsTeacher(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.user_type == User.TEACHER


class IsStudentOrParent(BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.user_type in (
            User.STUDENT,
            User.PARENT,
        )


class IsSchoolStaff(BasePermission):
    """Admins may do anything; teachers may only read"""

    def has_permission(self, request, view):
        user = request.user
        if not user.is_authenticated:
            return False
        if user.is_superuser or user.is_school_admin:
            return True
        return user.user_type == User.TEACHER and request.method in SAFE_METHODS


class IsSubjectTeacherOrAdmin(BasePermission):
    """Object-level check for report card subject rows"""

    def has_permission(self, request, view):
        return request.user.is_authenticated and (
            request.user.is_superuser
            or request.user.is_school_admin
            or request.user.user_type == User.TEACHER
        )

    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.is_superuser:
            return True
        if obj.report_card.school_class.school_id != user.school_id:
            return False
        return user.is_school_admin or obj.teacher_id == user.id

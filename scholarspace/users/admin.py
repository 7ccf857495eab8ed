from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models.base_user import User
from .models.parent import ParentStudentLink


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "first_name", "last_name", "user_type", "school")
    list_filter = ("user_type", "school", "is_active", "is_staff")
    search_fields = ("username", "email", "first_name", "last_name")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("School", {"fields": ("user_type", "school")}),
    )


@admin.register(ParentStudentLink)
class ParentStudentLinkAdmin(admin.ModelAdmin):
    list_display = ("parent", "student", "relationship", "created_at")
    list_filter = ("relationship",)
    search_fields = (
        "parent__first_name",
        "parent__last_name",
        "student__first_name",
        "student__last_name",
    )
    raw_id_fields = ("parent", "student")

from django.contrib import admin
from scholarspace.schools.models.school import School
from scholarspace.schools.models.form import Form
from scholarspace.schools.models.schoolclass import SchoolClass, StudentClassAssignment


@admin.register(School)
class SchoolAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "type", "current_academic_year", "current_term")
    list_filter = ("type", "is_active")
    search_fields = ("name", "code")


@admin.register(Form)
class FormAdmin(admin.ModelAdmin):
    list_display = ("form_name", "form_number", "school", "is_active")
    list_filter = ("school", "is_active")


class StudentClassAssignmentInline(admin.TabularInline):
    model = StudentClassAssignment
    extra = 0
    raw_id_fields = ("student",)


@admin.register(SchoolClass)
class SchoolClassAdmin(admin.ModelAdmin):
    list_display = ("class_name", "form", "school", "academic_year", "is_active")
    list_filter = ("school", "form", "academic_year", "is_active")
    search_fields = ("class_name", "class_code")
    inlines = [StudentClassAssignmentInline]

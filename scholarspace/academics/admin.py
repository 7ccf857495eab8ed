from django.contrib import admin
from scholarspace.academics.models.subject import Subject, ClassSubject
from scholarspace.academics.models.assessment import SubjectAssessment, StudentGrade
from scholarspace.academics.models.attendance import Lesson, LessonAttendance


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    list_display = ("subject_name", "subject_code", "school")
    list_filter = ("school",)
    search_fields = ("subject_name", "subject_code")


@admin.register(ClassSubject)
class ClassSubjectAdmin(admin.ModelAdmin):
    list_display = ("subject", "school_class", "teacher")
    list_filter = ("school_class__school", "school_class")
    raw_id_fields = ("teacher",)


class StudentGradeInline(admin.TabularInline):
    model = StudentGrade
    extra = 0
    raw_id_fields = ("student",)


@admin.register(SubjectAssessment)
class SubjectAssessmentAdmin(admin.ModelAdmin):
    list_display = ("title", "class_subject", "assessment_type", "term", "total_marks")
    list_filter = ("assessment_type", "term")
    search_fields = ("title",)
    inlines = [StudentGradeInline]


class LessonAttendanceInline(admin.TabularInline):
    model = LessonAttendance
    extra = 0
    raw_id_fields = ("student",)


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    list_display = ("class_subject", "lesson_date", "topic")
    list_filter = ("lesson_date",)
    inlines = [LessonAttendanceInline]

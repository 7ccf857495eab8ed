from django.contrib import admin
from scholarspace.report_cards.models.report_card import ReportCard, ReportCardGrade


class ReportCardGradeInline(admin.TabularInline):
    model = ReportCardGrade
    extra = 0
    readonly_fields = (
        "subject_name",
        "teacher_name",
        "coursework_avg",
        "exam_mark",
        "final_mark",
        "grade_letter",
    )
    raw_id_fields = ("subject", "teacher")


@admin.register(ReportCard)
class ReportCardAdmin(admin.ModelAdmin):
    list_display = (
        "student",
        "school_class",
        "academic_year",
        "term",
        "status",
        "overall_average",
        "class_rank",
    )
    list_filter = ("status", "academic_year", "term", "school")
    search_fields = ("student__first_name", "student__last_name", "student__username")
    raw_id_fields = ("student", "generated_by", "published_by")
    inlines = [ReportCardGradeInline]

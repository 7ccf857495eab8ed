from rest_framework import serializers
from scholarspace.report_cards.models.report_card import (
    ReportCard,
    ReportCardGrade,
    ReportCardStatus,
    ConductGrade,
)
from scholarspace.academics.models.assessment import TERM_CHOICES
from scholarspace.users.serializers.base_user import BaseUserSerializer


class ReportCardGradeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReportCardGrade
        fields = [
            "id",
            "subject",
            "subject_name",
            "teacher",
            "teacher_name",
            "coursework_avg",
            "exam_mark",
            "final_mark",
            "grade_letter",
            "effort_grade",
            "teacher_comment",
            "updated_at",
        ]
        read_only_fields = fields


class SubjectCommentSerializer(serializers.Serializer):
    teacher_comment = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    # Fields left out of the request are not touched. Validated against A-E by
    # the workflow so the error code stays consistent.
    effort_grade = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )


class ReportCardSerializer(serializers.ModelSerializer):
    student_details = BaseUserSerializer(source="student", read_only=True)
    class_name = serializers.CharField(source="school_class.class_name", read_only=True)
    form_name = serializers.SerializerMethodField()
    status_display = serializers.CharField(source="get_status_display", read_only=True)
    grades = serializers.SerializerMethodField()

    class Meta:
        model = ReportCard
        fields = [
            "id",
            "student",
            "student_details",
            "school",
            "school_class",
            "class_name",
            "form",
            "form_name",
            "academic_year",
            "term",
            "status",
            "status_display",
            "overall_average",
            "class_rank",
            "attendance_percentage",
            "days_present",
            "days_absent",
            "days_late",
            "total_school_days",
            "conduct_grade",
            "form_teacher_comment",
            "principal_comment",
            "next_term_begins",
            "generated_by",
            "published_by",
            "published_at",
            "created_at",
            "updated_at",
            "grades",
        ]
        read_only_fields = fields

    def get_form_name(self, obj):
        return obj.form.form_name if obj.form else None

    def get_grades(self, obj):
        grades = sorted(obj.grades.all(), key=lambda g: g.subject_name)
        return ReportCardGradeSerializer(grades, many=True).data


class ReportCardUpdateSerializer(serializers.Serializer):
    """Admin-editable fields of a generated card"""

    principal_comment = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    form_teacher_comment = serializers.CharField(
        required=False, allow_blank=True, allow_null=True
    )
    conduct_grade = serializers.ChoiceField(
        choices=ConductGrade.choices, required=False, allow_blank=True
    )
    next_term_begins = serializers.DateField(required=False, allow_null=True)


class CohortSerializer(serializers.Serializer):
    class_id = serializers.IntegerField()
    academic_year = serializers.CharField(max_length=20)
    term = serializers.ChoiceField(choices=TERM_CHOICES)


class GenerateReportCardsSerializer(CohortSerializer):
    run_async = serializers.BooleanField(required=False, allow_null=True, default=None)


class UpdateStatusSerializer(serializers.Serializer):
    report_card_ids = serializers.ListField(
        child=serializers.IntegerField(), allow_empty=False
    )
    status = serializers.ChoiceField(choices=ReportCardStatus.choices)

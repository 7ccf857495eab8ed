from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from scholarspace.schools.models.school import School
from scholarspace.schools.models.form import Form
from scholarspace.schools.models.schoolclass import SchoolClass
from scholarspace.academics.models.assessment import TERM_CHOICES


class ReportCardStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    REVIEW = "REVIEW", "Review"
    PUBLISHED = "PUBLISHED", "Published"

    def next_status(self):
        """The single status this one may advance to, or None once published."""
        return _NEXT_STATUS[self]

    def can_transition_to(self, new_status):
        return self.next_status() == new_status


_NEXT_STATUS = {
    ReportCardStatus.DRAFT: ReportCardStatus.REVIEW,
    ReportCardStatus.REVIEW: ReportCardStatus.PUBLISHED,
    ReportCardStatus.PUBLISHED: None,
}


class EffortGrade(models.TextChoices):
    A = "A", "Outstanding"
    B = "B", "Good"
    C = "C", "Satisfactory"
    D = "D", "Needs Improvement"
    E = "E", "Unsatisfactory"


class ConductGrade(models.TextChoices):
    EXCELLENT = "Excellent", "Excellent"
    VERY_GOOD = "Very Good", "Very Good"
    GOOD = "Good", "Good"
    SATISFACTORY = "Satisfactory", "Satisfactory"
    NEEDS_IMPROVEMENT = "Needs Improvement", "Needs Improvement"


class ReportCard(models.Model):
    """A student's end-of-term report for one class"""

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="report_cards",
    )
    school = models.ForeignKey(
        School,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="report_cards",
    )
    school_class = models.ForeignKey(
        SchoolClass, on_delete=models.CASCADE, related_name="report_cards"
    )
    form = models.ForeignKey(
        Form,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="report_cards",
    )
    academic_year = models.CharField(max_length=20)
    term = models.PositiveSmallIntegerField(choices=TERM_CHOICES)
    status = models.CharField(
        max_length=10,
        choices=ReportCardStatus.choices,
        default=ReportCardStatus.DRAFT,
        db_index=True,
    )

    overall_average = models.FloatField(null=True, blank=True)
    class_rank = models.PositiveIntegerField(null=True, blank=True)

    attendance_percentage = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    days_present = models.PositiveIntegerField(default=0)
    days_absent = models.PositiveIntegerField(default=0)
    days_late = models.PositiveIntegerField(default=0)
    total_school_days = models.PositiveIntegerField(default=0)

    conduct_grade = models.CharField(
        max_length=20, choices=ConductGrade.choices, blank=True, default=""
    )
    form_teacher_comment = models.TextField(blank=True, null=True)
    principal_comment = models.TextField(blank=True, null=True)
    next_term_begins = models.DateField(null=True, blank=True)

    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="generated_report_cards",
    )
    published_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="published_report_cards",
    )
    published_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["class_rank", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "school_class", "academic_year", "term"],
                name="unique_report_card_per_student_term",
            )
        ]
        indexes = [
            models.Index(fields=["school_class", "academic_year", "term"]),
        ]
        permissions = [
            ("generate_reportcard", "Can generate report cards"),
            ("publish_reportcard", "Can publish report cards"),
        ]

    def __str__(self):
        return f"{self.student} - {self.school_class.class_name} (Term {self.term} {self.academic_year})"

    @property
    def is_published(self):
        return self.status == ReportCardStatus.PUBLISHED

    @property
    def is_editable(self):
        return not self.is_published


class ReportCardGrade(models.Model):
    """One subject line on a report card"""

    report_card = models.ForeignKey(
        ReportCard, on_delete=models.CASCADE, related_name="grades"
    )
    subject = models.ForeignKey(
        "academics.Subject",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="report_card_grades",
    )
    subject_name = models.CharField(max_length=100, blank=True, default="")
    teacher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="report_card_grades",
    )
    teacher_name = models.CharField(max_length=255, blank=True, default="")
    coursework_avg = models.FloatField(null=True, blank=True)
    exam_mark = models.FloatField(null=True, blank=True)
    final_mark = models.FloatField(null=True, blank=True)
    # Empty string when the student has no final mark for the subject
    grade_letter = models.CharField(max_length=2, blank=True, default="")
    effort_grade = models.CharField(
        max_length=1, choices=EffortGrade.choices, null=True, blank=True
    )
    teacher_comment = models.TextField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["subject_name"]

    def __str__(self):
        return f"{self.subject_name}: {self.final_mark} ({self.grade_letter or '-'})"

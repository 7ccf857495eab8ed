from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal, ROUND_HALF_UP
from scholarspace.academics.models.subject import ClassSubject


class AssessmentType(models.TextChoices):
    EXAM = "EXAM", "Exam"
    MOCK_EXAM = "MOCK_EXAM", "Mock Exam"
    TEST = "TEST", "Test"
    QUIZ = "QUIZ", "Quiz"
    HOMEWORK = "HOMEWORK", "Homework"
    PROJECT = "PROJECT", "Project"
    PRACTICAL = "PRACTICAL", "Practical"
    OTHER = "OTHER", "Other"


# Grades from these assessment types count towards the exam mark; every other
# type counts towards coursework.
EXAM_TYPES = frozenset({AssessmentType.EXAM.value, AssessmentType.MOCK_EXAM.value})

TERM_CHOICES = [(1, "Term 1"), (2, "Term 2"), (3, "Term 3")]


class SubjectAssessment(models.Model):
    class_subject = models.ForeignKey(
        ClassSubject, on_delete=models.CASCADE, related_name="assessments"
    )
    title = models.CharField(max_length=200)
    assessment_type = models.CharField(
        max_length=20, choices=AssessmentType.choices, default=AssessmentType.TEST
    )
    term = models.PositiveSmallIntegerField(choices=TERM_CHOICES)
    total_marks = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        default=100,
    )
    weight = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
        default=100,
    )
    assessment_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["term", "assessment_date", "title"]

    def __str__(self):
        return f"{self.title} ({self.get_assessment_type_display()}, Term {self.term})"


class StudentGrade(models.Model):
    """Marks a student obtained in one assessment"""

    assessment = models.ForeignKey(
        SubjectAssessment, on_delete=models.CASCADE, related_name="grades"
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="assessment_grades",
    )
    marks_obtained = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("assessment", "student")

    def __str__(self):
        return f"{self.student} - {self.assessment.title}: {self.percentage}%"

    def clean(self):
        if self.marks_obtained is not None and self.marks_obtained > self.assessment.total_marks:
            raise ValidationError("Marks obtained cannot exceed the assessment total")
        super().clean()

    def calculate_percentage(self):
        total = Decimal(self.assessment.total_marks)
        raw = Decimal(self.marks_obtained) / total * 100
        return raw.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def save(self, *args, **kwargs):
        if self.percentage is None and self.marks_obtained is not None:
            self.percentage = self.calculate_percentage()
        super().save(*args, **kwargs)

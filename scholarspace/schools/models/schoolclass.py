from django.db import models
from django.conf import settings
from scholarspace.schools.models.school import School
from scholarspace.schools.models.form import Form


class SchoolClass(models.Model):
    class_name = models.CharField(max_length=100)
    class_code = models.CharField(max_length=20, blank=True)
    form = models.ForeignKey(
        Form, on_delete=models.PROTECT, null=True, blank=True, related_name="classes"
    )
    school = models.ForeignKey(School, on_delete=models.CASCADE, related_name="classes")
    form_teacher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="form_classes",
    )
    academic_year = models.CharField(max_length=20, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("class_name", "school", "academic_year")
        ordering = ["class_name"]
        verbose_name_plural = "Classes"

    def __str__(self):
        return f"{self.class_name} ({self.academic_year})"


class StudentClassAssignment(models.Model):
    """Class roster membership; only active rows count towards report cards"""

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="class_assignments",
    )
    school_class = models.ForeignKey(
        SchoolClass, on_delete=models.CASCADE, related_name="assignments"
    )
    is_active = models.BooleanField(default=True)
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("student", "school_class")
        ordering = ["school_class", "student__last_name", "student__first_name"]

    def __str__(self):
        state = "active" if self.is_active else "inactive"
        return f"{self.student} in {self.school_class.class_name} ({state})"

from django.db import models
from django.conf import settings
from scholarspace.schools.models.school import School
from scholarspace.schools.models.schoolclass import SchoolClass


class Subject(models.Model):
    subject_name = models.CharField(max_length=100)
    subject_code = models.CharField(max_length=20, blank=True)
    school = models.ForeignKey(
        School, on_delete=models.CASCADE, related_name="subjects"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("subject_name", "school")
        ordering = ["subject_name"]

    def __str__(self):
        return self.subject_name


class ClassSubject(models.Model):
    """A subject taught to one class by one teacher"""

    school_class = models.ForeignKey(
        SchoolClass, on_delete=models.CASCADE, related_name="class_subjects"
    )
    subject = models.ForeignKey(
        Subject, on_delete=models.PROTECT, related_name="class_subjects"
    )
    teacher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="class_subjects",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("school_class", "subject")
        ordering = ["subject__subject_name"]

    def __str__(self):
        return f"{self.subject.subject_name} ({self.school_class.class_name})"

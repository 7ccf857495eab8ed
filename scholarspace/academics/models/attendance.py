from django.db import models
from django.conf import settings
from scholarspace.academics.models.subject import ClassSubject


class AttendanceStatus(models.TextChoices):
    PRESENT = "PRESENT", "Present"
    ABSENT = "ABSENT", "Absent"
    LATE = "LATE", "Late"
    EXCUSED = "EXCUSED", "Excused"
    SICK = "SICK", "Sick"


class Lesson(models.Model):
    class_subject = models.ForeignKey(
        ClassSubject, on_delete=models.CASCADE, related_name="lessons"
    )
    lesson_date = models.DateField()
    topic = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-lesson_date"]

    def __str__(self):
        return f"{self.class_subject} on {self.lesson_date}"


class LessonAttendance(models.Model):
    lesson = models.ForeignKey(
        Lesson, on_delete=models.CASCADE, related_name="attendance"
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="lesson_attendance",
    )
    # Stored as recorded; older imports used lowercase tokens, so readers
    # compare case-insensitively.
    status = models.CharField(max_length=10, default=AttendanceStatus.PRESENT)
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("lesson", "student")
        verbose_name_plural = "Lesson attendance"

    def __str__(self):
        return f"{self.student} - {self.lesson}: {self.status}"

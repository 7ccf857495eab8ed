from django.db import models
from django.core.exceptions import ValidationError
from .base_user import User


class ParentStudentLink(models.Model):
    """Links a parent account to the student accounts whose report cards it may read"""

    RELATIONSHIP_CHOICES = [
        ("MOTHER", "Mother"),
        ("FATHER", "Father"),
        ("GUARDIAN", "Guardian"),
        ("OTHER", "Other"),
    ]

    parent = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="child_links"
    )
    student = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="parent_links"
    )
    relationship = models.CharField(
        max_length=20, choices=RELATIONSHIP_CHOICES, default="GUARDIAN"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("parent", "student")
        verbose_name = "Parent-Student Link"
        verbose_name_plural = "Parent-Student Links"

    def __str__(self):
        return f"{self.parent} -> {self.student} ({self.get_relationship_display()})"

    def clean(self):
        if self.parent.user_type != User.PARENT:
            raise ValidationError("Only parent accounts can be linked to students")
        if self.student.user_type != User.STUDENT:
            raise ValidationError("Parents can only be linked to student accounts")
        super().clean()

from django.db import models
import random


class School(models.Model):
    SCHOOL_TYPES = [
        ("PRI", "Primary"),
        ("SEC", "Secondary"),
        ("HS", "High School"),
    ]

    name = models.CharField(max_length=255, unique=True)
    code = models.CharField(max_length=20, unique=True)
    type = models.CharField(max_length=3, choices=SCHOOL_TYPES, default="SEC")
    motto = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=300, blank=True, null=True)
    phone = models.CharField(max_length=20, null=True, blank=True)
    email = models.EmailField(blank=True)
    current_academic_year = models.CharField(max_length=20, null=True, blank=True)
    current_term = models.PositiveSmallIntegerField(
        choices=[(1, "Term 1"), (2, "Term 2"), (3, "Term 3")],
        null=True,
        blank=True,
    )
    is_active = models.BooleanField(default=True)
    registration_date = models.DateTimeField(auto_now_add=True)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = f"{self.name[:3].upper()}{random.randint(100,999)}"
        super().save(*args, **kwargs)

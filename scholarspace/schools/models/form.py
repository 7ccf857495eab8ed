from django.db import models
from django.core.exceptions import ValidationError
from scholarspace.schools.models.school import School


class Form(models.Model):
    """A year group within a school, e.g. "Form 2"; classes are streams of a form"""

    school = models.ForeignKey(School, on_delete=models.CASCADE, related_name="forms")
    form_name = models.CharField(max_length=50)
    form_number = models.PositiveSmallIntegerField()
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("school", "form_number")
        ordering = ["form_number"]

    def clean(self):
        if (
            Form.objects.filter(school=self.school, form_name=self.form_name)
            .exclude(pk=self.pk)
            .exists()
        ):
            raise ValidationError("A form with this name already exists for this school.")

    def __str__(self):
        return f"{self.form_name} ({self.school.name})"

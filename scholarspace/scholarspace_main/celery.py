import os
from celery import Celery

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE", "scholarspace.scholarspace_main.settings.base"
)  # Change based on the environment

app = Celery("scholarspace")

# Load task modules from all registered Django app configs.
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks(["scholarspace.report_cards"], related_name="utils.tasks")

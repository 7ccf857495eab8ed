# scholarspace_main/settings/test.py

from .base import *

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Run Celery tasks inline so views and tasks can be exercised without a broker
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Write action logs synchronously during tests
ACTION_LOG_TEST_MODE = True

REPORT_CARDS_RUN_ASYNC = False

LOGGING["loggers"]["scholarspace"]["level"] = "CRITICAL"

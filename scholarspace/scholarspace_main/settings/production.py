# scholarspace_main/settings/production.py

from .base import *
from decouple import config, Csv

DEBUG = False

ALLOWED_HOSTS = config(
    "DJANGO_ALLOWED_HOSTS",
    default="scholarspace.example.com,localhost,127.0.0.1",
    cast=Csv(),
)

SECRET_KEY = config("SECRET_KEY")
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

# Static files
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "mediafiles"

# Security settings for production
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

CSRF_TRUSTED_ORIGINS = config(
    "CSRF_TRUSTED_ORIGINS",
    cast=Csv(),
    default="https://scholarspace.example.com",
)

CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS",
    cast=Csv(),
    default="https://scholarspace.example.com",
)
CORS_ALLOW_CREDENTIALS = True

LOGGING["handlers"]["console"]["level"] = "INFO"
LOGGING["root"] = {
    "handlers": ["console"],
    "level": "INFO",
}

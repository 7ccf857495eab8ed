from django.apps import AppConfig


class ReportCardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "scholarspace.report_cards"
    label = "report_cards"

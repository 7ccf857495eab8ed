from django.urls import path, include
from rest_framework.routers import DefaultRouter
from scholarspace.report_cards.views.report_card import (
    ReportCardViewSet,
    ReportCardGradeViewSet,
)

router = DefaultRouter()
router.register(r"cards", ReportCardViewSet, basename="report-card")
router.register(r"grades", ReportCardGradeViewSet, basename="report-card-grade")

urlpatterns = [
    path("", include(router.urls)),
]

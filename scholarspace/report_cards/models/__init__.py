from .report_card import (
    ReportCardStatus,
    EffortGrade,
    ConductGrade,
    ReportCard,
    ReportCardGrade,
)


__all__ = [
    "ReportCardStatus",
    "EffortGrade",
    "ConductGrade",
    "ReportCard",
    "ReportCardGrade",
]

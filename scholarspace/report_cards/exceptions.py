from rest_framework import status


class ReportCardError(Exception):
    """Base class for report card failures the API reports to callers."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "report_card_error"
    default_message = "Report card operation failed"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_response_data(self):
        return {"error": self.message, "code": self.default_code}


# === PRECONDITION ERRORS (raised before any write) ===


class ClassNotFound(ReportCardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "class_not_found"
    default_message = "Class not found"


class NoStudentsInClass(ReportCardError):
    default_code = "no_students"
    default_message = "No students found in this class"


class NoSubjectsConfigured(ReportCardError):
    default_code = "no_subjects"
    default_message = "No subjects assigned to this class"


class ReportCardsAlreadyGenerated(ReportCardError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "already_generated"

    def __init__(self, existing_count):
        self.existing_count = existing_count
        super().__init__(
            f"Report cards already exist for this class/term. "
            f"{existing_count} report cards found."
        )

    def as_response_data(self):
        data = super().as_response_data()
        data["existing_count"] = self.existing_count
        return data


# === WORKFLOW ERRORS ===


class InvalidStatusTransition(ReportCardError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "invalid_transition"

    def __init__(self, new_status, blocking_ids):
        self.new_status = new_status
        self.blocking_ids = list(blocking_ids)
        super().__init__(
            f"{len(self.blocking_ids)} report card(s) cannot move to {new_status}"
        )

    def as_response_data(self):
        data = super().as_response_data()
        data["report_card_ids"] = self.blocking_ids
        return data


class ReportCardsNotFound(ReportCardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "report_cards_not_found"

    def __init__(self, missing_ids):
        self.missing_ids = list(missing_ids)
        super().__init__(f"{len(self.missing_ids)} report card(s) not found")

    def as_response_data(self):
        data = super().as_response_data()
        data["report_card_ids"] = self.missing_ids
        return data


class NoReportCardsInStatus(ReportCardError):
    default_code = "nothing_to_transition"

    def __init__(self, current_status):
        self.current_status = current_status
        super().__init__(f"No {current_status} report cards found for this class/term")


class ReportCardLocked(ReportCardError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "report_card_locked"
    default_message = "Published report cards can no longer be edited"


# === VALIDATION ERRORS ===


class InvalidEffortGrade(ReportCardError):
    default_code = "invalid_effort_grade"

    def __init__(self, value):
        self.value = value
        super().__init__(f"'{value}' is not a valid effort grade (expected A-E)")

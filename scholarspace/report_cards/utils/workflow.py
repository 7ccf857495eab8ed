from django.db import transaction
from django.utils import timezone
from scholarspace.report_cards.models.report_card import (
    ReportCard,
    ReportCardGrade,
    ReportCardStatus,
    EffortGrade,
)
from scholarspace.report_cards.exceptions import (
    InvalidStatusTransition,
    ReportCardsNotFound,
    NoReportCardsInStatus,
    ReportCardLocked,
    InvalidEffortGrade,
)
from scholarspace.action_logs.utils.action_log import log_action
from scholarspace.action_logs.models.action_log import ActionCategory
import logging

logger = logging.getLogger(__name__)

# Fields a school admin may edit on a card after generation
ADMIN_EDITABLE_FIELDS = (
    "principal_comment",
    "form_teacher_comment",
    "conduct_grade",
    "next_term_begins",
)


def _cohort(class_id, academic_year, term):
    return ReportCard.objects.filter(
        school_class_id=class_id, academic_year=academic_year, term=term
    )


# === STATUS TRANSITIONS ===


def update_status(report_card_ids, new_status, actor=None):
    """
    Move the given cards to ``new_status`` in one statement.

    Every id must exist and every card must be exactly one step behind
    ``new_status`` (DRAFT -> REVIEW -> PUBLISHED); otherwise nothing is written.
    """
    report_card_ids = list(report_card_ids)
    if new_status not in ReportCardStatus.values:
        raise InvalidStatusTransition(new_status, report_card_ids)
    new_status = ReportCardStatus(new_status)

    current = dict(
        ReportCard.objects.filter(id__in=report_card_ids).values_list("id", "status")
    )
    missing = [card_id for card_id in report_card_ids if card_id not in current]
    if missing:
        raise ReportCardsNotFound(missing)

    blocking = [
        card_id
        for card_id, status in current.items()
        if not ReportCardStatus(status).can_transition_to(new_status)
    ]
    if blocking:
        raise InvalidStatusTransition(new_status, blocking)

    now = timezone.now()
    updates = {"status": new_status, "updated_at": now}
    if new_status == ReportCardStatus.PUBLISHED:
        updates["published_by"] = actor
        updates["published_at"] = now

    with transaction.atomic():
        count = ReportCard.objects.filter(id__in=report_card_ids).update(**updates)

    log_action(
        user=actor,
        action=f"Moved {count} report card(s) to {new_status}",
        category=(
            ActionCategory.PUBLISH
            if new_status == ReportCardStatus.PUBLISHED
            else ActionCategory.UPDATE
        ),
        metadata={"report_card_ids": report_card_ids, "new_status": new_status.value},
    )
    logger.info(f"Moved {count} report card(s) to {new_status}")
    return count


def _advance_cohort(class_id, academic_year, term, from_status, actor):
    ids = list(
        _cohort(class_id, academic_year, term)
        .filter(status=from_status)
        .values_list("id", flat=True)
    )
    if not ids:
        raise NoReportCardsInStatus(from_status)
    return update_status(ids, from_status.next_status(), actor)


def send_for_review(class_id, academic_year, term, actor=None):
    """DRAFT -> REVIEW for every draft card of the class/term."""
    return _advance_cohort(class_id, academic_year, term, ReportCardStatus.DRAFT, actor)


def publish(class_id, academic_year, term, actor=None):
    """REVIEW -> PUBLISHED for every card under review; there is no way back."""
    return _advance_cohort(class_id, academic_year, term, ReportCardStatus.REVIEW, actor)


def delete_draft_report_cards(class_id, academic_year, term, actor=None):
    """Delete DRAFT cards so a class/term can be regenerated. Returns the count."""
    drafts = _cohort(class_id, academic_year, term).filter(
        status=ReportCardStatus.DRAFT
    )
    ids = list(drafts.values_list("id", flat=True))
    if not ids:
        return 0

    ReportCard.objects.filter(id__in=ids).delete()

    log_action(
        user=actor,
        action=f"Deleted {len(ids)} draft report card(s)",
        category=ActionCategory.DELETE,
        metadata={
            "class_id": class_id,
            "academic_year": academic_year,
            "term": term,
            "report_card_ids": ids,
        },
    )
    return len(ids)


# === EDITORS ===


def normalise_effort_grade(value):
    if value in (None, ""):
        return None
    value = str(value).strip().upper()
    if value not in EffortGrade.values:
        raise InvalidEffortGrade(value)
    return value


def update_subject_comment(grade_id, teacher_comment=None, effort_grade=None, actor=None):
    """
    Set a subject teacher's comment and/or effort grade on one report card line.

    ``None`` leaves a field as it is; a blank effort grade clears it.
    """
    changes = {}
    if teacher_comment is not None:
        changes["teacher_comment"] = teacher_comment
    if effort_grade is not None:
        changes["effort_grade"] = normalise_effort_grade(effort_grade)

    grade = ReportCardGrade.objects.select_related("report_card").get(id=grade_id)
    if grade.report_card.is_published:
        raise ReportCardLocked()

    for field, value in changes.items():
        setattr(grade, field, value)
    grade.save(update_fields=list(changes) + ["updated_at"])

    log_action(
        user=actor,
        action=f"Updated {grade.subject_name} comment",
        category=ActionCategory.UPDATE,
        obj=grade.report_card,
        metadata={
            "grade_id": grade.id,
            "fields": list(changes),
            "effort_grade": grade.effort_grade,
        },
    )
    return grade


def update_report_card(report_card_id, updates, actor=None):
    """Apply admin edits; keys outside ADMIN_EDITABLE_FIELDS are ignored."""
    card = ReportCard.objects.get(id=report_card_id)
    if card.is_published:
        raise ReportCardLocked()

    changed = [field for field in ADMIN_EDITABLE_FIELDS if field in updates]
    for field in changed:
        setattr(card, field, updates[field])
    card.save(update_fields=changed + ["updated_at"])

    if changed:
        log_action(
            user=actor,
            action="Updated report card comments",
            category=ActionCategory.UPDATE,
            obj=card,
            metadata={"fields": changed},
        )
    return card


# === READERS ===


def get_report_cards_for_student(student_id):
    """Published cards only, newest first."""
    return (
        ReportCard.objects.filter(
            student_id=student_id, status=ReportCardStatus.PUBLISHED
        )
        .select_related("school_class", "form")
        .prefetch_related("grades")
        .order_by("-academic_year", "-term")
    )


def get_teacher_review_cards(teacher_id):
    """
    Cards under review that include at least one subject taught by the teacher,
    each with only that teacher's subject lines.
    """
    grades = (
        ReportCardGrade.objects.filter(
            teacher_id=teacher_id, report_card__status=ReportCardStatus.REVIEW
        )
        .select_related(
            "report_card__student", "report_card__school_class", "report_card__form"
        )
        .order_by("report_card_id", "subject_name")
    )

    cards = {}
    for grade in grades:
        card = grade.report_card
        if card.id not in cards:
            cards[card.id] = {
                "report_card_id": card.id,
                "student_id": card.student_id,
                "student_name": card.student.name,
                "academic_year": card.academic_year,
                "term": card.term,
                "status": card.status,
                "class_id": card.school_class_id,
                "class_name": card.school_class.class_name,
                "form_name": card.form.form_name if card.form else None,
                "subjects": [],
            }
        cards[card.id]["subjects"].append(
            {
                "id": grade.id,
                "subject_name": grade.subject_name,
                "final_mark": grade.final_mark,
                "grade_letter": grade.grade_letter,
                "effort_grade": grade.effort_grade,
                "teacher_comment": grade.teacher_comment,
            }
        )
    return list(cards.values())

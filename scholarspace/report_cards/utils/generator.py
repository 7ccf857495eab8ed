from django.db import transaction, DatabaseError
from django.utils import timezone
from scholarspace.report_cards.models.report_card import (
    ReportCard,
    ReportCardGrade,
    ReportCardStatus,
)
from scholarspace.report_cards.exceptions import (
    NoStudentsInClass,
    NoSubjectsConfigured,
    ReportCardsAlreadyGenerated,
)
from scholarspace.report_cards.utils import queries
from scholarspace.report_cards.utils.calculations import (
    bucket_grades,
    build_subject_rows,
    overall_average,
    summarise_attendance,
    rank_order,
)
from scholarspace.action_logs.utils.action_log import (
    log_action_async,
    log_system_action,
)
from scholarspace.action_logs.models.action_log import ActionCategory
from collections import defaultdict
import logging
import traceback

logger = logging.getLogger(__name__)


def build_report_card(student_id, student_buckets, class_subjects, attendance_statuses):
    """
    Roll one student's grades and attendance up into report card field values.

    Returns ``(card_fields, grade_rows)``; nothing is saved.
    """
    grade_rows = build_subject_rows(student_buckets, class_subjects)
    attendance = summarise_attendance(attendance_statuses)

    card_fields = {
        "student_id": student_id,
        "overall_average": overall_average(row["final_mark"] for row in grade_rows),
        "attendance_percentage": attendance["percentage"],
        "days_present": attendance["present"],
        "days_absent": attendance["absent"],
        "days_late": attendance["late"],
        "total_school_days": attendance["total"],
    }
    return card_fields, grade_rows


def _insert_report_card(card_fields, grade_rows, school_class, academic_year, term, generated_by):
    with transaction.atomic():
        card = ReportCard.objects.create(
            school=school_class.school,
            school_class=school_class,
            form=school_class.form,
            academic_year=academic_year,
            term=term,
            status=ReportCardStatus.DRAFT,
            generated_by=generated_by,
            **card_fields,
        )
        ReportCardGrade.objects.bulk_create(
            [ReportCardGrade(report_card=card, **row) for row in grade_rows]
        )
    return card


def rank_cohort(class_id, academic_year, term):
    """
    Rank every report card of a class/year/term, best overall average first.

    All ranks are written in one statement. Returns the ids left unranked
    when the write fails, so callers can report them instead of aborting.
    """
    cards = list(queries.fetch_existing_cards(class_id, academic_year, term))
    ordered = rank_order(cards)
    for position, card in enumerate(ordered, start=1):
        card.class_rank = position
        card.updated_at = timezone.now()

    try:
        with transaction.atomic():
            ReportCard.objects.bulk_update(ordered, ["class_rank", "updated_at"])
    except DatabaseError as e:
        unranked = [card.id for card in ordered]
        logger.error(
            f"Failed to rank report cards for class {class_id} "
            f"({academic_year} term {term}): {str(e)}"
        )
        log_system_action(
            action=f"Failed to rank report cards for class {class_id}",
            category=ActionCategory.SYSTEM,
            metadata={
                "academic_year": academic_year,
                "term": term,
                "report_card_ids": unranked,
                "error": str(e),
            },
        )
        return unranked

    return []


def generate_report_cards(class_id, academic_year, term, generated_by=None):
    """
    Create DRAFT report cards for every active student of a class who does not
    have one yet for the given academic year and term, then re-rank the cohort.

    Raises a precondition error before writing anything when the class is
    missing, has no students or subjects, or is already fully generated.
    A failed insert for one student is recorded and the batch continues.
    """
    start_time = timezone.now()

    school_class = queries.fetch_class(class_id)

    roster = queries.fetch_active_roster(class_id)
    if not roster:
        raise NoStudentsInClass()

    class_subjects = queries.fetch_class_subjects(class_id)
    if not class_subjects:
        raise NoSubjectsConfigured()

    class_subject_ids = [cs["class_subject_id"] for cs in class_subjects]

    assessments = queries.fetch_assessments(class_subject_ids, term)
    grades = queries.fetch_grades([a["assessment_id"] for a in assessments])
    buckets = bucket_grades(grades, assessments)

    lesson_ids = queries.fetch_lessons(class_subject_ids)
    attendance_by_student = defaultdict(list)
    for row in queries.fetch_attendance(lesson_ids):
        attendance_by_student[row["student_id"]].append(row["status"])

    existing_student_ids = set(
        queries.fetch_existing_cards(class_id, academic_year, term).values_list(
            "student_id", flat=True
        )
    )

    student_ids = [entry["student_id"] for entry in roster]
    new_student_ids = [sid for sid in student_ids if sid not in existing_student_ids]

    if not new_student_ids and existing_student_ids:
        raise ReportCardsAlreadyGenerated(len(existing_student_ids))

    log_action_async(
        user=generated_by,
        action=f"Starting report card generation for class {school_class.class_name}",
        category=ActionCategory.CREATE,
        obj=school_class,
        metadata={
            "academic_year": academic_year,
            "term": term,
            "students_to_generate": len(new_student_ids),
            "already_generated": len(existing_student_ids),
        },
    )

    succeeded = []
    failed = []

    for student_id in new_student_ids:
        card_fields, grade_rows = build_report_card(
            student_id,
            buckets.get(student_id, {}),
            class_subjects,
            attendance_by_student.get(student_id, []),
        )
        try:
            card = _insert_report_card(
                card_fields, grade_rows, school_class, academic_year, term, generated_by
            )
        except DatabaseError as e:
            logger.error(
                f"Failed to insert report card for student {student_id}: {str(e)}"
            )
            failed.append({"student_id": student_id, "error": str(e)})
            log_action_async(
                user=generated_by,
                action=f"Failed to generate report card for student {student_id}",
                category=ActionCategory.SYSTEM,
                obj=school_class,
                metadata={
                    "student_id": student_id,
                    "error": str(e),
                    "traceback": traceback.format_exc(),
                },
            )
            continue
        succeeded.append(card.id)

    unranked = []
    if succeeded:
        unranked = rank_cohort(class_id, academic_year, term)

    total_duration = (timezone.now() - start_time).total_seconds()
    result = {
        "class_id": school_class.id,
        "class_name": school_class.class_name,
        "academic_year": academic_year,
        "term": term,
        "generated": len(succeeded),
        "total": len(student_ids),
        "existing": len(existing_student_ids),
        "succeeded": succeeded,
        "failed": failed,
        "unranked": unranked,
        "time_taken_seconds": total_duration,
    }

    log_action_async(
        user=generated_by,
        action=f"Completed report card generation for class {school_class.class_name}",
        category=ActionCategory.CREATE,
        obj=school_class,
        metadata={
            "academic_year": academic_year,
            "term": term,
            "generated": len(succeeded),
            "total": len(student_ids),
            "failed": len(failed),
            "unranked": len(unranked),
            "total_time_seconds": total_duration,
        },
    )
    logger.info(
        f"Generated {len(succeeded)}/{len(student_ids)} report cards for class "
        f"{school_class.class_name} ({academic_year} term {term})"
    )

    return result

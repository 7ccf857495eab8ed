"""Pure rollup arithmetic for report cards.

Nothing here touches the database: the generator feeds rows fetched by
``queries`` through these functions and persists what comes back.
"""
import math
from collections import defaultdict
from scholarspace.academics.models.assessment import EXAM_TYPES
from scholarspace.academics.models.attendance import AttendanceStatus

COURSEWORK_WEIGHT = 0.6
EXAM_WEIGHT = 0.4

# (minimum final mark, letter), highest first
GRADE_BOUNDARIES = [
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]
FAILING_GRADE = "F"
UNGRADED = ""


def round_one(value):
    """Round to one decimal place, halves upwards."""
    if value is None:
        return None
    return math.floor(value * 10 + 0.5) / 10


def average(values):
    values = list(values)
    if not values:
        return None
    return round_one(sum(values) / len(values))


def final_mark(coursework_avg, exam_mark):
    """Blend coursework and exam 60/40; fall back to whichever one exists."""
    if coursework_avg is not None and exam_mark is not None:
        return round_one(coursework_avg * COURSEWORK_WEIGHT + exam_mark * EXAM_WEIGHT)
    if coursework_avg is not None:
        return coursework_avg
    return exam_mark


def grade_letter(mark):
    if mark is None:
        return UNGRADED
    for minimum, letter in GRADE_BOUNDARIES:
        if mark >= minimum:
            return letter
    return FAILING_GRADE


def overall_average(final_marks):
    """Mean of the subjects that have a final mark; missing subjects are not zeros."""
    return average(mark for mark in final_marks if mark is not None)


def empty_bucket():
    return {"coursework": [], "exam": []}


def bucket_grades(grades, assessments):
    """
    Group grade percentages by student and class subject.

    Returns ``{student_id: {class_subject_id: {"coursework": [...], "exam": [...]}}}``.
    Grades whose assessment is not in ``assessments`` are ignored.
    """
    assessment_map = {a["assessment_id"]: a for a in assessments}
    buckets = defaultdict(lambda: defaultdict(empty_bucket))

    for grade in grades:
        assessment = assessment_map.get(grade["assessment_id"])
        if assessment is None:
            continue
        bucket = buckets[grade["student_id"]][assessment["class_subject_id"]]
        if assessment["assessment_type"] in EXAM_TYPES:
            bucket["exam"].append(grade["percentage"])
        else:
            bucket["coursework"].append(grade["percentage"])

    return buckets


def build_subject_rows(student_buckets, class_subjects):
    """One report card grade row per class subject, in class subject order."""
    rows = []
    for cs in class_subjects:
        bucket = student_buckets.get(cs["class_subject_id"]) or empty_bucket()
        coursework_avg = average(bucket["coursework"])
        exam_mark = average(bucket["exam"])
        mark = final_mark(coursework_avg, exam_mark)
        rows.append(
            {
                "subject_id": cs["subject_id"],
                "subject_name": cs["subject_name"] or "",
                "teacher_id": cs["teacher_id"],
                "teacher_name": cs["teacher_name"] or "",
                "coursework_avg": coursework_avg,
                "exam_mark": exam_mark,
                "final_mark": mark,
                "grade_letter": grade_letter(mark),
                "effort_grade": None,
                "teacher_comment": None,
            }
        )
    return rows


def summarise_attendance(statuses):
    """
    Count attendance tokens for one student.

    Late arrivals are reported separately but still count as attended when
    computing the percentage.
    """
    present = absent = late = total = 0
    for raw in statuses:
        total += 1
        token = (raw or "").upper()
        if token == AttendanceStatus.PRESENT:
            present += 1
        elif token == AttendanceStatus.ABSENT:
            absent += 1
        elif token == AttendanceStatus.LATE:
            late += 1

    percentage = None
    if total:
        percentage = math.floor((present + late) / total * 1000 + 0.5) / 10

    return {
        "present": present,
        "absent": absent,
        "late": late,
        "total": total,
        "percentage": percentage,
    }


def rank_order(cards):
    """
    Sort cards best first by overall average, treating a missing average as 0.

    ``sorted`` is stable, so ties keep the order the cards were passed in.
    """
    return sorted(cards, key=lambda card: card.overall_average or 0, reverse=True)

"""Read-side row fetches used by report card generation.

Each function returns plain dicts so the rollup in ``calculations`` stays
independent of the ORM.
"""
from django.db.models import F
from scholarspace.schools.models.schoolclass import SchoolClass, StudentClassAssignment
from scholarspace.academics.models.subject import ClassSubject
from scholarspace.academics.models.assessment import SubjectAssessment, StudentGrade
from scholarspace.academics.models.attendance import Lesson, LessonAttendance
from scholarspace.report_cards.models.report_card import ReportCard
from scholarspace.report_cards.exceptions import ClassNotFound


def fetch_class(class_id):
    try:
        return SchoolClass.objects.select_related("form", "school").get(id=class_id)
    except SchoolClass.DoesNotExist:
        raise ClassNotFound(f"Class {class_id} not found")


def fetch_active_roster(class_id):
    assignments = (
        StudentClassAssignment.objects.filter(school_class_id=class_id, is_active=True)
        .select_related("student")
        .order_by("id")
    )
    return [
        {
            "student_id": a.student_id,
            "student_name": a.student.name,
            "student_email": a.student.email,
        }
        for a in assignments
    ]


def fetch_class_subjects(class_id):
    class_subjects = (
        ClassSubject.objects.filter(school_class_id=class_id)
        .select_related("subject", "teacher")
        .order_by("id")
    )
    return [
        {
            "class_subject_id": cs.id,
            "teacher_id": cs.teacher_id,
            "teacher_name": cs.teacher.name if cs.teacher else "",
            "subject_id": cs.subject_id,
            "subject_name": cs.subject.subject_name,
        }
        for cs in class_subjects
    ]


def fetch_assessments(class_subject_ids, term):
    if not class_subject_ids:
        return []
    return list(
        SubjectAssessment.objects.filter(
            class_subject_id__in=class_subject_ids, term=term
        )
        .order_by("id")
        .values("class_subject_id", "assessment_type", assessment_id=F("id"))
    )


def fetch_grades(assessment_ids):
    if not assessment_ids:
        return []
    grades = (
        StudentGrade.objects.filter(
            assessment_id__in=assessment_ids, percentage__isnull=False
        )
        .order_by("id")
        .values("assessment_id", "student_id", "percentage")
    )
    return [
        {
            "assessment_id": g["assessment_id"],
            "student_id": g["student_id"],
            "percentage": float(g["percentage"]),
        }
        for g in grades
    ]


def fetch_lessons(class_subject_ids):
    if not class_subject_ids:
        return []
    return list(
        Lesson.objects.filter(class_subject_id__in=class_subject_ids)
        .order_by("id")
        .values_list("id", flat=True)
    )


def fetch_attendance(lesson_ids):
    if not lesson_ids:
        return []
    return list(
        LessonAttendance.objects.filter(lesson_id__in=lesson_ids)
        .order_by("id")
        .values("lesson_id", "student_id", "status")
    )


def fetch_existing_cards(class_id, academic_year, term):
    return ReportCard.objects.filter(
        school_class_id=class_id, academic_year=academic_year, term=term
    ).order_by("id")

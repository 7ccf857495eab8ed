from .subject import Subject, ClassSubject
from .assessment import AssessmentType, SubjectAssessment, StudentGrade
from .attendance import AttendanceStatus, Lesson, LessonAttendance


__all__ = [
    "Subject",
    "ClassSubject",
    "AssessmentType",
    "SubjectAssessment",
    "StudentGrade",
    "AttendanceStatus",
    "Lesson",
    "LessonAttendance",
]

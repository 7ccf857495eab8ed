import factory
from faker import Faker
from django.contrib.auth import get_user_model
from scholarspace.schools.models.school import School
from scholarspace.schools.models.form import Form
from scholarspace.schools.models.schoolclass import SchoolClass, StudentClassAssignment
from scholarspace.academics.models.subject import Subject, ClassSubject
from scholarspace.academics.models.assessment import (
    SubjectAssessment,
    StudentGrade,
    AssessmentType,
)
from scholarspace.academics.models.attendance import Lesson, LessonAttendance
from scholarspace.report_cards.models.report_card import (
    ReportCard,
    ReportCardGrade,
    ReportCardStatus,
)

User = get_user_model()
fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    user_type = User.STUDENT
    password = factory.PostGenerationMethodCall("set_password", "password")


class SchoolFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = School

    name = factory.Sequence(lambda n: f"School {n}")
    code = factory.Sequence(lambda n: f"SCH{n}")
    location = factory.Faker("city")
    email = factory.Sequence(lambda n: f"school{n}@example.com")
    current_academic_year = "2024"
    current_term = 1


class FormFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Form

    school = factory.SubFactory(SchoolFactory)
    form_number = factory.Sequence(lambda n: n + 1)
    form_name = factory.LazyAttribute(lambda o: f"Form {o.form_number}")


class SchoolClassFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SchoolClass

    school = factory.SubFactory(SchoolFactory)
    form = factory.SubFactory(FormFactory, school=factory.SelfAttribute("..school"))
    class_name = factory.Sequence(lambda n: f"Class {n}")
    class_code = factory.Sequence(lambda n: f"C{n}")
    academic_year = "2024"


class StudentClassAssignmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = StudentClassAssignment

    school_class = factory.SubFactory(SchoolClassFactory)
    student = factory.SubFactory(
        UserFactory,
        user_type=User.STUDENT,
        school=factory.SelfAttribute("..school_class.school"),
    )
    is_active = True


class SubjectFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Subject

    school = factory.SubFactory(SchoolFactory)
    subject_name = factory.Sequence(lambda n: f"Subject {n}")
    subject_code = factory.Sequence(lambda n: f"SUB{n}")


class ClassSubjectFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ClassSubject

    school_class = factory.SubFactory(SchoolClassFactory)
    subject = factory.SubFactory(
        SubjectFactory, school=factory.SelfAttribute("..school_class.school")
    )
    teacher = factory.SubFactory(
        UserFactory,
        user_type=User.TEACHER,
        school=factory.SelfAttribute("..school_class.school"),
    )


class SubjectAssessmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SubjectAssessment

    class_subject = factory.SubFactory(ClassSubjectFactory)
    title = factory.LazyFunction(lambda: fake.sentence(nb_words=3))
    assessment_type = AssessmentType.TEST
    term = 1
    total_marks = 100


class StudentGradeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = StudentGrade

    assessment = factory.SubFactory(SubjectAssessmentFactory)
    student = factory.SubFactory(UserFactory)
    marks_obtained = 50


class LessonFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Lesson

    class_subject = factory.SubFactory(ClassSubjectFactory)
    lesson_date = factory.Faker("date_this_year")
    topic = factory.Faker("word")


class LessonAttendanceFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = LessonAttendance

    lesson = factory.SubFactory(LessonFactory)
    student = factory.SubFactory(UserFactory)
    status = "PRESENT"


class ReportCardFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ReportCard

    school_class = factory.SubFactory(SchoolClassFactory)
    school = factory.SelfAttribute("school_class.school")
    form = factory.SelfAttribute("school_class.form")
    student = factory.SubFactory(
        UserFactory, school=factory.SelfAttribute("..school_class.school")
    )
    academic_year = "2024"
    term = 1
    status = ReportCardStatus.DRAFT


class ReportCardGradeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ReportCardGrade

    report_card = factory.SubFactory(ReportCardFactory)
    subject_name = factory.Sequence(lambda n: f"Subject {n}")
    teacher = factory.SubFactory(UserFactory, user_type=User.TEACHER)
    teacher_name = factory.LazyAttribute(lambda o: o.teacher.name if o.teacher else "")
    final_mark = 75.0
    grade_letter = "B"

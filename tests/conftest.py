import pytest

from gradetracker.models import Course
from tests.helpers import make_assignment


@pytest.fixture
def cs101():
    return Course(
        id=1,
        name="Introduction to Computer Science",
        code="CS101",
        target_grade=85,
        assignments=[
            make_assignment(1, 92, 10, type="Homework", date="2025-01-15"),
            make_assignment(2, 88, 15, type="Quiz", date="2025-01-22"),
            make_assignment(3, 82, 25, type="Midterm Exam", date="2025-02-15"),
        ],
    )


@pytest.fixture
def empty_course():
    return Course(id=2, name="Calculus I", code="MATH201")

"""Course and assignment records, validated on construction"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from gradetracker.backend_logic import ensure_weight_budget
from gradetracker.constants import (
    ASSIGNMENT_TYPES,
    COURSE_COLORS,
    DEFAULT_ASSIGNMENT_TYPE,
    DEFAULT_COLOR,
    DEFAULT_TARGET_GRADE,
    MAX_CODE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PERCENT,
    MIN_PERCENT,
)
from gradetracker.errors import DuplicateCourseError, RangeError, ValidationError


# ------------------------
# Field checks
# ------------------------
def check_percent(value: Any, label: str) -> float:
    """Return value as a float, or raise RangeError unless it lies in 0-100."""
    if isinstance(value, bool):
        raise RangeError(f"{label} must be a number", error_code="not_a_number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise RangeError(f"{label} must be a number", error_code="not_a_number")
    if math.isnan(number) or number < MIN_PERCENT or number > MAX_PERCENT:
        raise RangeError(
            f"{label} must be between 0 and 100",
            error_code="out_of_range",
            details={"value": number},
        )
    return number


def check_text(value: Any, label: str, max_length: int) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{label} is required", error_code="required")
    if len(text) > max_length:
        raise ValidationError(
            f"{label} must be less than {max_length} characters",
            error_code="too_long",
        )
    return text


def check_date(value: Any) -> date:
    # datetime (and pandas.Timestamp) subclass date, so test them first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}", error_code="bad_date")


# ------------------------
# Records
# ------------------------
@dataclass(frozen=True)
class Assignment:
    id: int
    name: str
    grade: float
    weight: float
    type: str = DEFAULT_ASSIGNMENT_TYPE
    date: date = field(default_factory=date.today)

    def __post_init__(self):
        object.__setattr__(self, "name", check_text(self.name, "Assignment name", MAX_NAME_LENGTH))
        object.__setattr__(self, "grade", check_percent(self.grade, "Grade"))
        object.__setattr__(self, "weight", check_percent(self.weight, "Weight"))
        if self.type not in ASSIGNMENT_TYPES:
            raise ValidationError(
                f"Unknown assignment type: {self.type!r}", error_code="bad_type"
            )
        object.__setattr__(self, "date", check_date(self.date))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Assignment":
        return cls(
            id=data["id"],
            name=data.get("name"),
            grade=data.get("grade"),
            weight=data.get("weight"),
            type=data.get("type") or DEFAULT_ASSIGNMENT_TYPE,
            date=data.get("date") or date.today(),
        )


@dataclass(frozen=True)
class Course:
    id: int
    name: str
    code: str
    target_grade: float = DEFAULT_TARGET_GRADE
    color: str = DEFAULT_COLOR
    assignments: Tuple[Assignment, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "name", check_text(self.name, "Course name", MAX_NAME_LENGTH))
        object.__setattr__(self, "code", check_text(self.code, "Course code", MAX_CODE_LENGTH))
        object.__setattr__(self, "target_grade", check_percent(self.target_grade, "Target grade"))
        if self.color not in COURSE_COLORS:
            raise ValidationError(f"Unknown course colour: {self.color!r}", error_code="bad_color")
        object.__setattr__(self, "assignments", tuple(self.assignments))
        ids = [a.id for a in self.assignments]
        if len(set(ids)) != len(ids):
            raise ValidationError(
                f"Duplicate assignment ids in course {self.code}",
                error_code="duplicate_assignment",
                details={"ids": sorted({i for i in ids if ids.count(i) > 1})},
            )
        # total weight may not exceed 100%
        ensure_weight_budget(self.assignments, 0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        target = data.get("target_grade")
        return cls(
            id=data["id"],
            name=data.get("name"),
            code=data.get("code"),
            target_grade=DEFAULT_TARGET_GRADE if target is None else target,
            color=data.get("color") or DEFAULT_COLOR,
            assignments=[Assignment.from_dict(a) for a in data.get("assignments", [])],
        )


def assignments_by_date(course: Course, newest_first: bool = True) -> List[Assignment]:
    return sorted(course.assignments, key=lambda a: a.date, reverse=newest_first)


def ensure_unique_code(courses: Iterable[Course], code: str, exclude_id: Optional[int] = None) -> None:
    """Raise DuplicateCourseError if another course already uses code (ignoring case)."""
    wanted = code.strip().lower()
    for course in courses:
        if course.id != exclude_id and course.code.lower() == wanted:
            raise DuplicateCourseError(
                "A course with this code already exists",
                error_code="duplicate_course",
                details={"code": code, "course_id": course.id},
            )

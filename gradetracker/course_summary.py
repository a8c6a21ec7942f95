"""Per-course read model and budget-gated assignment updates"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from gradetracker.backend_logic import (
    BudgetCheck,
    GradeBand,
    Outlook,
    check_weight_budget,
    classify_grade,
    ensure_weight_budget,
    final_grade_outlook,
    required_final_grade,
    weighted_mean,
)
from gradetracker.constants import MAX_TOTAL_WEIGHT
from gradetracker.errors import ValidationError
from gradetracker.models import Assignment, Course, check_percent, ensure_unique_code

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseSummary:
    course_id: int
    current_grade: float
    current_letter: GradeBand
    target_grade: float
    target_letter: GradeBand
    total_weight: float
    remaining_weight: float
    required_final: Optional[float]
    outlook: Optional[Outlook]

    @property
    def has_grades(self) -> bool:
        return self.total_weight > 0

    @property
    def completion(self) -> float:
        """Share of the course already graded, for progress display (0-100)."""
        return min(self.total_weight, MAX_TOTAL_WEIGHT)


@dataclass(frozen=True)
class Scenario:
    desired_grade: float
    final_weight: float
    required: Optional[float]
    outlook: Optional[Outlook]


def course_summary(course: Course) -> CourseSummary:
    """
    Recompute the grade picture for one course from its assignments.

    The required final grade is only projected while some, but not all, of the
    course weight has been graded; otherwise it is None (not applicable).
    """
    current = weighted_mean(course.assignments)
    remaining_weight = max(0.0, MAX_TOTAL_WEIGHT - current.total_weight)

    required = None
    if 0 < current.total_weight < MAX_TOTAL_WEIGHT:
        required = required_final_grade(
            current.grade, current.total_weight, course.target_grade, remaining_weight
        )

    summary = CourseSummary(
        course_id=course.id,
        current_grade=current.grade,
        current_letter=classify_grade(current.grade),
        target_grade=course.target_grade,
        target_letter=classify_grade(course.target_grade),
        total_weight=current.total_weight,
        remaining_weight=remaining_weight,
        required_final=required,
        outlook=final_grade_outlook(required),
    )
    logger.debug("Summary for course %s: %s", course.id, summary)
    return summary


def final_grade_scenario(course: Course, desired_grade: float, final_weight: float) -> Scenario:
    """
    What-if calculator: score needed on a final worth final_weight percent to
    finish the course on desired_grade. The final weight is taken as given
    rather than inferred from the ungraded share.
    """
    desired_grade = check_percent(desired_grade, "Desired grade")
    final_weight = check_percent(final_weight, "Final weight")

    current = weighted_mean(course.assignments)
    required = required_final_grade(current.grade, current.total_weight, desired_grade, final_weight)
    return Scenario(
        desired_grade=desired_grade,
        final_weight=final_weight,
        required=required,
        outlook=final_grade_outlook(required),
    )


# ------------------------
# Budget-gated updates
# ------------------------
def check_assignment_budget(course: Course, weight: float, exclude_id: Optional[int] = None) -> BudgetCheck:
    return check_weight_budget(course.assignments, weight, exclude_id)


def add_assignment(course: Course, assignment: Assignment) -> Course:
    """Return a copy of course with assignment appended, or raise WeightBudgetExceeded."""
    if any(a.id == assignment.id for a in course.assignments):
        raise ValidationError(
            f"Assignment id {assignment.id} already exists in {course.code}",
            error_code="duplicate_assignment",
        )
    ensure_weight_budget(course.assignments, assignment.weight)
    return replace(course, assignments=course.assignments + (assignment,))


def update_assignment(course: Course, assignment: Assignment) -> Course:
    """Return a copy of course with the assignment of the same id replaced."""
    if not any(a.id == assignment.id for a in course.assignments):
        raise ValidationError(
            f"Assignment id {assignment.id} not found in {course.code}",
            error_code="not_found",
        )
    ensure_weight_budget(course.assignments, assignment.weight, exclude_id=assignment.id)
    updated = tuple(assignment if a.id == assignment.id else a for a in course.assignments)
    return replace(course, assignments=updated)


def remove_assignment(course: Course, assignment_id: int) -> Course:
    return replace(course, assignments=tuple(a for a in course.assignments if a.id != assignment_id))


def edit_course(courses: Sequence[Course], course: Course, **changes) -> Course:
    """
    Return course with name, code, target_grade or color changed. The new code
    must not clash with any other course; assignments are carried over as-is.
    """
    unknown = set(changes) - {"name", "code", "target_grade", "color"}
    if unknown:
        raise ValidationError(f"Cannot edit course fields: {sorted(unknown)}", error_code="bad_field")
    updated = replace(course, **changes)
    ensure_unique_code(courses, updated.code, exclude_id=course.id)
    if updated.target_grade != course.target_grade:
        logger.debug("Course %s target changed %s -> %s", course.id, course.target_grade, updated.target_grade)
    return updated

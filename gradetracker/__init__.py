"""Weighted grade tracking: averages, letter grades, weight budgets and final grade targets."""

import logging

from gradetracker.backend_logic import (
    BudgetCheck,
    GradeBand,
    Outlook,
    WeightedGrade,
    check_weight_budget,
    classify_grade,
    ensure_weight_budget,
    final_grade_outlook,
    required_final_grade,
    round_1dp_half_up,
    weighted_mean,
)
from gradetracker.course_summary import (
    CourseSummary,
    Scenario,
    add_assignment,
    check_assignment_budget,
    course_summary,
    edit_course,
    final_grade_scenario,
    remove_assignment,
    update_assignment,
)
from gradetracker.errors import (
    DuplicateCourseError,
    GradeTrackerError,
    RangeError,
    ValidationError,
    WeightBudgetExceeded,
)
from gradetracker.models import Assignment, Course, assignments_by_date, ensure_unique_code

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from gradetracker.constants import (
    ACHIEVABLE_MAX,
    CHALLENGING_MAX,
    GRADE_SCALE,
    MAX_TOTAL_WEIGHT,
    VERY_ACHIEVABLE_MAX,
)
from gradetracker.errors import WeightBudgetExceeded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeBand:
    letter: str
    min: float
    max: float
    color: str


@dataclass(frozen=True)
class WeightedGrade:
    grade: float
    total_weight: float


@dataclass(frozen=True)
class BudgetCheck:
    ok: bool
    current_total: float
    available: float


class Outlook(Enum):
    VERY_ACHIEVABLE = "Very achievable!"
    ACHIEVABLE = "Achievable with good preparation!"
    CHALLENGING = "Challenging but possible!"
    NOT_ACHIEVABLE = "This target may not be achievable with current grades."

    @property
    def achievable(self) -> bool:
        return self is not Outlook.NOT_ACHIEVABLE


GRADE_BANDS = tuple(GradeBand(*row) for row in GRADE_SCALE)
FAIL_BAND = GRADE_BANDS[-1]


# ------------------------
# Core logic
# ------------------------
def round_1dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def classify_grade(percentage: float) -> GradeBand:
    """
    Map a percentage to its letter grade band.

    Bands are matched on their lower bound, highest first, so 96.5 is an A.
    Anything above 100 is an A+; negatives and NaN fall through to F.
    """
    if percentage is None or math.isnan(percentage):
        return FAIL_BAND
    for band in GRADE_BANDS:
        if percentage >= band.min:
            return band
    return FAIL_BAND


def _grade_weight_array(assignments: Iterable[Any]) -> np.ndarray:
    rows = []
    for a in assignments:
        if isinstance(a, (tuple, list)):
            rows.append((float(a[0]), float(a[1])))
        else:
            rows.append((float(a.grade), float(a.weight)))
    if not rows:
        return np.zeros((0, 2), dtype=float)
    return np.array(rows, dtype=float)


def weighted_mean(assignments: Iterable[Any]) -> WeightedGrade:
    """
    assignments: objects with .grade/.weight, or (grade, weight) pairs
    returns: weight-averaged grade and the total weight consumed, unrounded
    """
    gw = _grade_weight_array(assignments)
    if gw.size == 0:
        return WeightedGrade(grade=0.0, total_weight=0.0)

    grades = gw[:, 0]
    weights = gw[:, 1]
    total_weight = float(weights.sum())
    if total_weight <= 0:
        return WeightedGrade(grade=0.0, total_weight=total_weight)

    mean = float(np.dot(grades, weights) / total_weight)
    return WeightedGrade(grade=mean, total_weight=total_weight)


def check_weight_budget(existing: Sequence[Any],
                        candidate_weight: float,
                        exclude_id: Optional[Any] = None) -> BudgetCheck:
    """
    Advise whether adding candidate_weight keeps the course at or under 100%.

    The assignment with id == exclude_id (the one being edited) is left out of
    the running total.
    """
    current_total = float(sum(a.weight for a in existing
                              if exclude_id is None or a.id != exclude_id))
    ok = current_total + float(candidate_weight) <= MAX_TOTAL_WEIGHT
    available = max(0.0, MAX_TOTAL_WEIGHT - current_total)
    return BudgetCheck(ok=ok, current_total=current_total, available=available)


def ensure_weight_budget(existing: Sequence[Any],
                         candidate_weight: float,
                         exclude_id: Optional[Any] = None) -> BudgetCheck:
    check = check_weight_budget(existing, candidate_weight, exclude_id)
    if not check.ok:
        logger.info(
            "Rejected weight %.2f: current total %.2f, available %.2f",
            candidate_weight, check.current_total, check.available,
        )
        raise WeightBudgetExceeded(check.current_total, check.available)
    return check


def required_final_grade(current_grade: float,
                         current_weight: float,
                         target_grade: float,
                         final_weight: float) -> Optional[float]:
    """
    Score needed on the remaining component to finish on target_grade.

    Returns None when final_weight <= 0 (nothing left to solve for). The
    result is floored at 0 but not capped: above 100 means the target cannot
    be reached even with a perfect score.
    """
    if final_weight <= 0:
        return None

    # target = current * (100 - fw)/100 + needed * fw/100
    required = (target_grade - current_grade * (100 - final_weight) / 100) / (final_weight / 100)
    logger.debug(
        "required_final_grade(current=%s, weight=%s, target=%s, final=%s) -> %s",
        current_grade, current_weight, target_grade, final_weight, required,
    )
    return max(0.0, required)


def final_grade_outlook(required: Optional[float]) -> Optional[Outlook]:
    if required is None:
        return None
    if required <= VERY_ACHIEVABLE_MAX:
        return Outlook.VERY_ACHIEVABLE
    elif required <= ACHIEVABLE_MAX:
        return Outlook.ACHIEVABLE
    elif required <= CHALLENGING_MAX:
        return Outlook.CHALLENGING
    else:
        return Outlook.NOT_ACHIEVABLE

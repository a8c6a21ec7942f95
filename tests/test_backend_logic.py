import math

import pytest

from gradetracker.backend_logic import (
    Outlook,
    check_weight_budget,
    classify_grade,
    ensure_weight_budget,
    final_grade_outlook,
    required_final_grade,
    round_1dp_half_up,
    weighted_mean,
)
from gradetracker.errors import WeightBudgetExceeded
from tests.helpers import make_assignment


# ------------------------
# classify_grade
# ------------------------
@pytest.mark.parametrize("pct, letter", [
    (100, "A+"), (97, "A+"), (96, "A"), (93, "A"), (92, "A-"), (90, "A-"),
    (89, "B+"), (87, "B+"), (86, "B"), (83, "B"), (82, "B-"), (80, "B-"),
    (79, "C+"), (77, "C+"), (76, "C"), (73, "C"), (72, "C-"), (70, "C-"),
    (69, "D+"), (67, "D+"), (66, "D"), (63, "D"), (62, "D-"), (60, "D-"),
    (59, "F"), (0, "F"),
])
def test_classify_boundaries(pct, letter):
    assert classify_grade(pct).letter == letter


def test_classify_fraction_uses_lower_bound():
    assert classify_grade(96.999).letter == "A"
    assert classify_grade(59.99).letter == "F"
    assert classify_grade(89.5).letter == "B+"


def test_classify_out_of_domain_is_total():
    assert classify_grade(-5).letter == "F"
    assert classify_grade(float("nan")).letter == "F"
    assert classify_grade(104).letter == "A+"


def test_classify_carries_colour():
    band = classify_grade(85)
    assert band.color == "#3b82f6"
    assert classify_grade(10).color == "#ef4444"


# ------------------------
# weighted_mean
# ------------------------
def test_weighted_mean_empty():
    result = weighted_mean([])
    assert result.grade == 0
    assert result.total_weight == 0


def test_weighted_mean_matches_formula():
    result = weighted_mean([(92, 10), (88, 15), (82, 25)])
    assert result.total_weight == 50
    assert result.grade == pytest.approx((92 * 10 + 88 * 15 + 82 * 25) / 50)


def test_weighted_mean_accepts_assignments():
    items = [make_assignment(1, 70, 20), make_assignment(2, 100, 60)]
    result = weighted_mean(items)
    assert result.grade == pytest.approx(92.5)
    assert result.total_weight == 80


def test_weighted_mean_zero_weight():
    result = weighted_mean([(80, 0), (90, 0)])
    assert result.grade == 0
    assert result.total_weight == 0


def test_weighted_mean_is_not_rounded():
    result = weighted_mean([(90, 1), (91, 2)])
    assert result.grade == pytest.approx(272 / 3)
    assert result.grade != round(result.grade, 1)


def test_weighted_mean_within_grade_range_and_repeatable():
    data = [(55, 3), (99.5, 12), (71, 7.5), (88, 0.5)]
    first = weighted_mean(data)
    assert 55 <= first.grade <= 99.5
    assert weighted_mean(data) == first


# ------------------------
# weight budget
# ------------------------
def test_budget_fits_exactly():
    existing = [make_assignment(1, 90, 30), make_assignment(2, 80, 40)]
    check = check_weight_budget(existing, 30)
    assert check.ok
    assert check.current_total == 70
    assert check.available == 30


def test_budget_rejects_overflow():
    existing = [make_assignment(1, 90, 30), make_assignment(2, 80, 40)]
    check = check_weight_budget(existing, 31)
    assert not check.ok
    assert check.available == 30


def test_budget_excludes_edited_assignment():
    existing = [make_assignment(1, 90, 50), make_assignment(2, 80, 30), make_assignment(3, 70, 20)]
    check = check_weight_budget(existing, 25, exclude_id=3)
    assert check.current_total == 80
    assert not check.ok
    assert check_weight_budget(existing, 20, exclude_id=3).ok


def test_budget_available_never_negative():
    check = check_weight_budget([], 0)
    assert check.available == 100
    assert check.ok


def test_ensure_budget_raises_with_totals():
    existing = [make_assignment(1, 90, 60), make_assignment(2, 80, 35)]
    with pytest.raises(WeightBudgetExceeded) as exc:
        ensure_weight_budget(existing, 10)
    assert exc.value.current_total == 95
    assert exc.value.available == 5
    assert "Available: 5%" in exc.value.message


# ------------------------
# required_final_grade
# ------------------------
def test_required_final_unreachable_target():
    required = required_final_grade(85, 70, 90, 30)
    assert required == pytest.approx(101.6667, abs=1e-3)
    assert final_grade_outlook(required) is Outlook.NOT_ACHIEVABLE


def test_required_final_reachable_target():
    required = required_final_grade(90, 80, 85, 20)
    assert required == pytest.approx(65)
    assert final_grade_outlook(required).achievable


def test_required_final_floors_at_zero():
    assert required_final_grade(100, 90, 50, 10) == 0


@pytest.mark.parametrize("final_weight", [0, -5])
def test_required_final_without_remaining_weight(final_weight):
    assert required_final_grade(85, 70, 90, final_weight) is None
    assert final_grade_outlook(None) is None


@pytest.mark.parametrize("required, outlook", [
    (0, Outlook.VERY_ACHIEVABLE),
    (60, Outlook.VERY_ACHIEVABLE),
    (60.1, Outlook.ACHIEVABLE),
    (85, Outlook.ACHIEVABLE),
    (99, Outlook.CHALLENGING),
    (100, Outlook.CHALLENGING),
    (100.01, Outlook.NOT_ACHIEVABLE),
])
def test_outlook_bands(required, outlook):
    assert final_grade_outlook(required) is outlook


def test_round_half_up():
    assert round_1dp_half_up(101.66666) == 101.7
    assert round_1dp_half_up(84.25) == 84.3
    assert not math.isnan(round_1dp_half_up(0))

"""
Exceptions raised by the grade engine.
"""

from typing import Any, Dict, Optional


class GradeTrackerError(Exception):
    """Base exception for all grade engine errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(GradeTrackerError, ValueError):
    """Raised when a course or assignment field is invalid."""
    pass


class RangeError(ValidationError):
    """Raised when a grade, weight or target lies outside 0-100."""
    pass


class DuplicateCourseError(ValidationError):
    """Raised when a course code is already taken."""
    pass


class WeightBudgetExceeded(GradeTrackerError):
    """Raised when a write would push a course's total weight above 100%."""

    def __init__(self, current_total: float, available: float):
        super().__init__(
            f"Adding this assignment would exceed 100% total weight. "
            f"Current: {current_total:g}%, Available: {available:g}%",
            error_code="weight_budget_exceeded",
            details={"current_total": current_total, "available": available},
        )
        self.current_total = current_total
        self.available = available

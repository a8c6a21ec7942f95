from gradetracker.models import Assignment


def make_assignment(id, grade, weight, **kwargs):
    kwargs.setdefault("name", f"Assignment {id}")
    kwargs.setdefault("date", "2025-01-15")
    return Assignment(id=id, grade=grade, weight=weight, **kwargs)

import logging
from datetime import date
from typing import List

import pandas as pd

from gradetracker.constants import DEFAULT_ASSIGNMENT_TYPE
from gradetracker.errors import ValidationError
from gradetracker.models import Assignment

logger = logging.getLogger(__name__)

# ------------------------
# CSV helpers (UI-side)
# ------------------------

COLUMN_ALIASES = {
    "mark": "grade",
    "score": "grade",
    "title": "name",
    "assignment": "name",
}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {k: v for k, v in COLUMN_ALIASES.items() if k in df.columns and v not in df.columns}
    if renames:
        df = df.rename(columns=renames)
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file)
    return _normalise_cols(df)


def validate_assignments_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"name", "grade", "weight"}
    missing = required - set(df.columns)
    if missing:
        raise ValidationError(
            f"Missing columns: {sorted(missing)}. Expected: Name, Grade, Weight (Type, Date optional).",
            error_code="missing_columns",
        )
    out = df[["name", "grade", "weight"]].copy()
    out["type"] = df["type"] if "type" in df.columns else DEFAULT_ASSIGNMENT_TYPE
    out["date"] = df["date"] if "date" in df.columns else date.today().isoformat()
    return out.rename(columns=str.title)


def parse_assignments(df: pd.DataFrame, start_id: int = 1) -> List[Assignment]:
    """
    Rows with no name, grade or weight are skipped; anything else that does
    not validate raises with the 1-based row number in the message.
    """
    rows = []
    next_id = start_id
    for idx, row in enumerate(df.itertuples(index=False), start=1):
        if pd.isna(row.Name) or pd.isna(row.Grade) or pd.isna(row.Weight):
            continue
        kind = DEFAULT_ASSIGNMENT_TYPE if pd.isna(row.Type) else str(row.Type).strip()
        when = date.today() if pd.isna(row.Date) else row.Date
        try:
            rows.append(Assignment(
                id=next_id,
                name=row.Name,
                grade=row.Grade,
                weight=row.Weight,
                type=kind,
                date=when,
            ))
        except ValidationError as e:
            e.message = f"Row {idx}: {e.message}"
            e.args = (e.message,)
            raise
        next_id += 1
    logger.debug("Parsed %d assignments from CSV", len(rows))
    return rows

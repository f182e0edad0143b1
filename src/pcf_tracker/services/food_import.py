"""Spreadsheet parsing for bulk food imports.

Values in imported sheets are per 100 grams. Columns are matched by name,
ignoring case and surrounding whitespace, against a small alias set.
"""

import io
from collections.abc import Iterable, Mapping
from pathlib import PurePath

import pandas as pd

from pcf_tracker.domain.errors import ValidationError

COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("dish", "food", "name"),
    "protein": ("protein", "p"),
    "carbs": ("carbs", "c"),
    "fats": ("fats", "f"),
    "calories": ("calories", "cal"),
}

EXCEL_EXTENSIONS = {".xlsx", ".xlsm", ".xls"}
CSV_EXTENSIONS = {".csv"}


def normalize_rows(rows: Iterable[Mapping[str, object]]) -> list[dict[str, object]]:
    """Map aliased columns of each row onto canonical food field names."""
    return [_normalize_row(row) for row in rows]


def read_spreadsheet(filename: str, content: bytes) -> list[dict[str, object]]:
    """Read the first sheet of an Excel or CSV file into row dictionaries."""
    extension = PurePath(filename or "").suffix.lower()
    if extension not in EXCEL_EXTENSIONS | CSV_EXTENSIONS:
        raise ValidationError("Only Excel or CSV files are allowed")
    try:
        if extension in CSV_EXTENSIONS:
            frame = pd.read_csv(io.BytesIO(content))
        else:
            frame = pd.read_excel(io.BytesIO(content), sheet_name=0)
    except Exception as exc:
        raise ValidationError(f"Error parsing spreadsheet: {exc}") from exc
    frame.columns = frame.columns.astype(str).str.strip()
    frame = frame.astype(object).where(frame.notna(), None)
    return frame.to_dict(orient="records")


def _normalize_row(row: Mapping[str, object]) -> dict[str, object]:
    lowered: dict[str, object] = {}
    for key, value in row.items():
        column = str(key).strip().lower()
        if not _has_value(lowered.get(column)):
            lowered[column] = value
    normalized: dict[str, object] = {}
    for field_name, aliases in COLUMN_ALIASES.items():
        normalized[field_name] = next(
            (
                lowered[alias]
                for alias in aliases
                if alias in lowered and _has_value(lowered[alias])
            ),
            None,
        )
    return normalized


def _has_value(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True

from __future__ import annotations

import zipfile
from datetime import date, datetime
from pathlib import PurePath
from typing import IO, Any

import pandas as pd

from ..common.datetime_utils import require_iso_date
from ..core.constants import STUDENT_IMPORT_COLUMNS
from ..core.exceptions import ValidationError
from .model import NewStudent


def _normalize_header(value: Any) -> str:
    return str(value).strip().lower().replace(" ", "_")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    return str(value).strip()


def _cell_to_date(value: Any, row_no: int) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _cell(value)
    # Spreadsheet dates read as text look like '1999-05-02 00:00:00'.
    if len(text) > 10 and text[10] in (" ", "T"):
        text = text[:10]
    return require_iso_date(text, f"dob (row {row_no})")


def read_student_frame(stream: IO[bytes], filename: str) -> pd.DataFrame:
    suffix = PurePath(filename or "").suffix.lower()
    try:
        if suffix in (".xlsx", ".xlsm"):
            return pd.read_excel(stream, engine="openpyxl", dtype=object)
        if suffix == ".csv":
            return pd.read_csv(stream, dtype=str, keep_default_na=False)
    except (ValueError, KeyError, zipfile.BadZipFile, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ValidationError(f"Unable to read uploaded file: {exc}")
    raise ValidationError("Uploaded file must be .xlsx or .csv")


def parse_students(stream: IO[bytes], filename: str) -> list[NewStudent]:
    """Read a student sheet with name, dob, email, phone_number columns."""
    df = read_student_frame(stream, filename)
    df = df.rename(columns=_normalize_header)

    missing = [c for c in STUDENT_IMPORT_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(f"Missing columns: {', '.join(missing)}")

    students: list[NewStudent] = []
    for idx, row in enumerate(df.to_dict(orient="records")):
        row_no = idx + 2  # header is row 1
        name = _cell(row.get("name"))
        if not name and not _cell(row.get("dob")):
            continue
        if not name:
            raise ValidationError(f"name is required (row {row_no})")
        students.append(
            NewStudent(
                name=name,
                dob=_cell_to_date(row.get("dob"), row_no),
                email=_cell(row.get("email")) or None,
                phone_number=_cell(row.get("phone_number")) or None,
            )
        )

    if not students:
        raise ValidationError("Uploaded file contains no students")
    return students

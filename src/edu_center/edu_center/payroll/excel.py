from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..core.exceptions import ValidationError

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_COLUMNS = ["Username", "Full name", "Gender", "Job position", "Course type", "Work days", "Price each", "Amount"]


def salary_report_to_xlsx(report: Sequence[dict]) -> bytes:
    """Flatten the grouped salary report (one row per payroll entry) into an xlsx sheet."""
    rows = []
    for user in report:
        if not isinstance(user, dict):
            raise ValidationError("Each salary report entry must be an object")
        for item in user.get("salary") or []:
            rows.append(
                [
                    user.get("user_name"),
                    user.get("full_name"),
                    user.get("gender"),
                    user.get("job_position"),
                    item.get("course_type"),
                    item.get("work_days"),
                    item.get("price_each"),
                    item.get("amount"),
                ]
            )

    df = pd.DataFrame(rows, columns=_COLUMNS)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Salary")
    return out.getvalue()

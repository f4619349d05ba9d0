from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, transaction
from .model import RateUpdate, SalaryReportLine
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


def _like_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped.lower()}%"


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_salary_report(
        self,
        *,
        month: int,
        year: int,
        full_name: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[SalaryReportLine]:
        clauses = ["s.month=%s", "s.year=%s"]
        params: list[object] = [int(month), int(year)]

        if user_id is not None:
            clauses.append("u.user_id=%s")
            params.append(user_id)
        if full_name:
            clauses.append("LOWER(u.full_name) LIKE %s")
            params.append(_like_pattern(full_name))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    u.user_id, u.username, u.full_name, u.gender, u.job_position,
                    s.payroll_id, p.type_payroll, s.total_work_dates, s.payroll_rate, s.salary
                FROM salaries s
                JOIN users u ON u.user_id = s.user_id
                JOIN payroll_types p ON p.payroll_id = s.payroll_id
                WHERE {where}
                ORDER BY u.full_name ASC, s.payroll_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        return [
            SalaryReportLine(
                user_id=str(r["user_id"]),
                username=r["username"],
                full_name=r["full_name"],
                gender=r.get("gender"),
                job_position=r.get("job_position"),
                payroll_id=int(r["payroll_id"]),
                type_payroll=r["type_payroll"],
                total_work_dates=int(r.get("total_work_dates") or 0),
                payroll_rate=float(r.get("payroll_rate") or 0),
                salary=float(r["salary"]) if r.get("salary") is not None else None,
            )
            for r in rows
        ]

    def update_rates(self, *, user_id: str, rates: Sequence[RateUpdate]) -> None:
        with transaction(self._conn_factory) as (_, cur):
            for rate in rates:
                cur.execute(
                    """
                    UPDATE employee_rates
                    SET payroll_rate=%s
                    WHERE user_id=%s AND payroll_id=%s
                    """,
                    (rate.payroll_amount, user_id, rate.payroll_id),
                )
                if cur.rowcount != 1:
                    raise NotFoundError(f"Payroll {rate.payroll_id} is not configured for user {user_id}")
        logger.info("Salary configuration updated for user %s (%s rates)", user_id, len(rates))

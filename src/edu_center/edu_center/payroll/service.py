from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..auth.claims import AuthClaims
from ..common.validators import require_month, require_year
from ..core.exceptions import AuthorizationError
from .calculator.base import PayrollCalculator
from .calculator.session_rate_calculator import SessionRateCalculator
from .model import ModifySalaryConfigurationRequest, SalaryReportLine
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class SalaryService:
    def __init__(
        self,
        payroll: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payroll = payroll
        self._calculator = calculator or SessionRateCalculator()

    def get_salary_information(
        self,
        claims: AuthClaims,
        *,
        month: Any,
        year: Any,
        search_name: Optional[str] = None,
    ) -> list[SalaryReportLine]:
        """Salary lines for the period, scoped by the caller's role.

        A plain user always gets their own lines, whatever name the client sent.
        Leaders and admins get every user, or a case-insensitive name match.
        """
        month_i = require_month(month)
        year_i = require_year(year)

        if not claims.is_elevated:
            lines = self._payroll.get_salary_report(month=month_i, year=year_i, user_id=claims.user_id)
        else:
            name = (search_name or "").strip() or None
            lines = self._payroll.get_salary_report(month=month_i, year=year_i, full_name=name)
        return list(lines)

    def build_report(self, lines: Sequence[SalaryReportLine]) -> list[dict]:
        """Group lines per user, keeping the order the query produced."""
        by_user: dict[str, dict] = {}
        for line in lines:
            entry = by_user.get(line.user_id)
            if not entry:
                entry = {
                    "user_id": line.user_id,
                    "user_name": line.username,
                    "full_name": line.full_name,
                    "gender": line.gender,
                    "job_position": line.job_position,
                    "salary": [],
                    "total": 0.0,
                }
                by_user[line.user_id] = entry

            amount = self._calculator.amount(line)
            entry["salary"].append(
                {
                    "payroll_id": line.payroll_id,
                    "course_type": line.type_payroll,
                    "work_days": line.total_work_dates,
                    "price_each": line.payroll_rate,
                    "amount": amount,
                }
            )
            entry["total"] = round(entry["total"] + amount, 2)
        return list(by_user.values())

    def modify_salary_configuration(self, claims: AuthClaims, req: ModifySalaryConfigurationRequest) -> None:
        if not claims.is_elevated:
            raise AuthorizationError("You are not allowed to access this function")

        self._payroll.update_rates(user_id=req.user_id, rates=req.rates)
        logger.info("%s updated %s payroll rates of user %s", claims.user_id, len(req.rates), req.user_id)

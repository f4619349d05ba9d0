from __future__ import annotations

from .base import PayrollCalculator
from ..model import SalaryReportLine


class SessionRateCalculator(PayrollCalculator):
    """Finalized salary when stored, otherwise work dates x rate."""

    def amount(self, line: SalaryReportLine) -> float:
        if line.salary is not None:
            return round(float(line.salary), 2)
        return round(max(int(line.total_work_dates), 0) * float(line.payroll_rate), 2)

from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import SalaryReportLine


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def amount(self, line: SalaryReportLine) -> float:
        raise NotImplementedError

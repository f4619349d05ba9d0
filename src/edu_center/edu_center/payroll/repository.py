from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import RateUpdate, SalaryReportLine


class PayrollRepository(Protocol):
    def get_salary_report(
        self,
        *,
        month: int,
        year: int,
        full_name: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[SalaryReportLine]:
        """Lines for the period; empty when nothing matches."""

        raise NotImplementedError

    def update_rates(self, *, user_id: str, rates: Sequence[RateUpdate]) -> None:
        """Apply every rate or none of them."""

        raise NotImplementedError

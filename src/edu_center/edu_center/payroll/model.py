from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..common.validators import require_int, require_non_empty, require_rate
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class SalaryReportLine:
    """Read-model: one payroll type of one user for one month."""

    user_id: str
    username: str
    full_name: str
    gender: Optional[str]
    job_position: Optional[str]
    payroll_id: int
    type_payroll: str
    total_work_dates: int
    payroll_rate: float
    salary: Optional[float] = None


@dataclass(frozen=True)
class RateUpdate:
    payroll_id: int
    payroll_amount: float

    @classmethod
    def from_json(cls, body: Any) -> "RateUpdate":
        if not isinstance(body, dict):
            raise ValidationError("Each salary configuration entry must be an object")
        return cls(
            payroll_id=require_int(body.get("payroll_id"), "payroll_id"),
            payroll_amount=require_rate(body.get("payroll_amount")),
        )


@dataclass(frozen=True)
class ModifySalaryConfigurationRequest:
    user_id: str
    rates: tuple[RateUpdate, ...]

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "ModifySalaryConfigurationRequest":
        entries = body.get("salary_configuration")
        if not isinstance(entries, list) or not entries:
            raise ValidationError("salary_configuration must be a non-empty list")
        rates = tuple(RateUpdate.from_json(e) for e in entries)
        if len({r.payroll_id for r in rates}) != len(rates):
            raise ValidationError("payroll_id must not repeat")
        return cls(user_id=require_non_empty(body.get("user_id"), "user_id"), rates=rates)

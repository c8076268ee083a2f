from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.constants import MS_PER_HOUR


@dataclass(frozen=True)
class HoursSplit:
    regular_ms: int
    overtime_ms: int

    @property
    def regular(self) -> float:
        return self.regular_ms / MS_PER_HOUR

    @property
    def overtime(self) -> float:
        return self.overtime_ms / MS_PER_HOUR


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def split(self, total_ms: int) -> HoursSplit:
        raise NotImplementedError

    def split_hours(self, total_hours: float) -> HoursSplit:
        return self.split(round(total_hours * MS_PER_HOUR))

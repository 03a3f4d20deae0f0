from datetime import date, time
from enum import Enum

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class RuleKind(str, Enum):
    OPEN = "open"
    BLOCKED = "blocked"  # whole days of the override range are unavailable


class PreparerAvailability(SQLModel, table=True):
    """Weekly (regular) or date-range (override) availability rule of a preparer."""

    __tablename__ = "preparer_availability"
    id: int | None = Field(default=None, primary_key=True)
    preparer_id: int = Field(foreign_key="preparers.id", index=True)
    kind: RuleKind = RuleKind.OPEN

    day_of_week: int | None = Field(default=None, ge=0, le=6)  # 0=Sunday, 6=Saturday
    start_time: time
    end_time: time

    is_override: bool = False
    override_from: date | None = None
    override_until: date | None = None

    # Empty list means every service may be booked in this window
    service_ids: list[int] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_active: bool = True

    def covers(self, d: date) -> bool:
        if not self.is_override or self.override_from is None or self.override_until is None:
            return False
        return self.override_from <= d <= self.override_until

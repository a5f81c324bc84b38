"""
Holiday schemas.

A holiday defines the order window [start_date, end_date] (inclusive)
whose demand is aggregated into a supplier report.
"""

from datetime import date

from pydantic import Field, field_validator

from models.base import BaseSchema


class Holiday(BaseSchema):
    """Holiday as stored in the `holidays` table."""

    id: str = Field(..., description="Holiday id")
    name: str = Field(..., min_length=1, description="Holiday name")
    start_date: date
    end_date: date
    active: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v) -> str:
        return str(v)

    @property
    def has_valid_window(self) -> bool:
        return self.end_date >= self.start_date


class DueHolidaysResponse(BaseSchema):
    """Holidays whose report is due on a given day."""

    today: date
    lookahead_days: int
    holidays: list[Holiday]

"""Week window model."""

from datetime import date, timedelta
from pydantic import BaseModel, ConfigDict, Field, model_validator

WEEK_LENGTH_DAYS = 7


class WeekWindow(BaseModel):
    """Seven consecutive calendar days, ``start`` and ``end`` both inclusive."""
    model_config = ConfigDict(frozen=True)

    start: date = Field(..., description="First day of the window")
    end: date = Field(..., description="Last day of the window (start + 6)")

    @model_validator(mode="after")
    def _spans_one_week(self) -> "WeekWindow":
        if self.end - self.start != timedelta(days=WEEK_LENGTH_DAYS - 1):
            raise ValueError("WeekWindow must span exactly 7 days (end = start + 6)")
        return self

    @classmethod
    def starting(cls, start: date) -> "WeekWindow":
        return cls(start=start, end=start + timedelta(days=WEEK_LENGTH_DAYS - 1))

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SeasonalRule(BaseModel):
    """Stay limits that replace the defaults for bookings starting in a month span.

    The span is inclusive and may wrap the year end (``start_month=11, end_month=2``).
    """

    model_config = ConfigDict(frozen=True)

    start_month: int = Field(ge=1, le=12)
    end_month: int = Field(ge=1, le=12)
    min_stay_days: int = Field(ge=1)
    max_stay_days: int = Field(ge=1)

    @model_validator(mode="after")
    def _min_not_above_max(self) -> "SeasonalRule":
        if self.min_stay_days > self.max_stay_days:
            raise ValueError("min_stay_days must not exceed max_stay_days")
        return self

    def covers(self, month: int) -> bool:
        if self.start_month <= self.end_month:
            return self.start_month <= month <= self.end_month
        return month >= self.start_month or month <= self.end_month


class AvailabilityRules(BaseModel):
    # allowed_days_of_week uses date.weekday() numbering: 0 is Monday, 6 is Sunday.
    model_config = ConfigDict(frozen=True)

    min_stay_days: int = Field(default=1, ge=1)
    max_stay_days: int = Field(default=365, ge=1)
    min_advance_booking_days: int = Field(default=0, ge=0)
    max_advance_booking_days: int = Field(default=365, ge=0)
    allowed_days_of_week: frozenset[int] = Field(default=frozenset(range(7)))
    seasonal_rules: tuple[SeasonalRule, ...] = ()

    @model_validator(mode="after")
    def _check_bounds(self) -> "AvailabilityRules":
        if self.min_stay_days > self.max_stay_days:
            raise ValueError("min_stay_days must not exceed max_stay_days")
        if self.min_advance_booking_days > self.max_advance_booking_days:
            raise ValueError("min_advance_booking_days must not exceed max_advance_booking_days")
        if any(d < 0 or d > 6 for d in self.allowed_days_of_week):
            raise ValueError("allowed_days_of_week entries must be between 0 and 6")
        return self

    def season_for(self, month: int) -> SeasonalRule | None:
        """First seasonal rule covering ``month``, if any."""
        for rule in self.seasonal_rules:
            if rule.covers(month):
                return rule
        return None

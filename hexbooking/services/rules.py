"""
Booking rules checked against a requested stay before any provider is asked.

Each check raises the domain ``ValidationError`` naming the broken rule in
``context["rule"]``.
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from hexbooking.core.errors import ValidationError
from hexbooking.domain.availability import DateRange
from hexbooking.domain.rules import AvailabilityRules


def parse_rules(data: AvailabilityRules | Mapping[str, Any]) -> AvailabilityRules:
    if isinstance(data, AvailabilityRules):
        return data
    try:
        return AvailabilityRules.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid availability rules",
            context={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


class AvailabilityRulesEngine:
    def __init__(self, rules: AvailabilityRules | Mapping[str, Any]):
        self.rules = parse_rules(rules)

    def validate_stay_duration(self, date_range: DateRange) -> None:
        """Seasonal limits for the start month override the defaults."""
        nights = date_range.nights
        season = self.rules.season_for(date_range.start_date.month)
        if season is not None:
            low, high, scope = season.min_stay_days, season.max_stay_days, " during this season"
        else:
            low, high, scope = self.rules.min_stay_days, self.rules.max_stay_days, ""

        if nights < low:
            raise ValidationError(
                f"Minimum stay{scope} is {low} days",
                context={"rule": "min_stay", "nights": nights, "min_stay_days": low},
            )
        if nights > high:
            raise ValidationError(
                f"Maximum stay{scope} is {high} days",
                context={"rule": "max_stay", "nights": nights, "max_stay_days": high},
            )

    def validate_advance_booking(self, date_range: DateRange, *, today: date | None = None) -> None:
        lead = (date_range.start_date - (today or date.today())).days
        if lead < self.rules.min_advance_booking_days:
            raise ValidationError(
                f"Bookings must be made at least {self.rules.min_advance_booking_days} days in advance",
                context={"rule": "min_advance_booking", "days_in_advance": lead},
            )
        if lead > self.rules.max_advance_booking_days:
            raise ValidationError(
                "Bookings cannot be made more than "
                f"{self.rules.max_advance_booking_days} days in advance",
                context={"rule": "max_advance_booking", "days_in_advance": lead},
            )

    def validate_days_of_week(self, date_range: DateRange) -> None:
        # Every day of the stay is checked, the check-out day included.
        day = date_range.start_date
        while day <= date_range.end_date:
            if day.weekday() not in self.rules.allowed_days_of_week:
                weekday = calendar.day_name[day.weekday()]
                raise ValidationError(
                    f"Bookings not allowed on {weekday}",
                    context={"rule": "days_of_week", "date": day.isoformat()},
                )
            day += timedelta(days=1)

    def validate_all(self, date_range: DateRange, *, today: date | None = None) -> None:
        self.validate_stay_duration(date_range)
        self.validate_advance_booking(date_range, today=today)
        self.validate_days_of_week(date_range)

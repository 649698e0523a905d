"""Mapping between the legacy calendar system's availability format and the domain model."""
from __future__ import annotations

from typing import Any, Mapping

from hexbooking.core.errors import ValidationError
from hexbooking.domain.availability import (
    AvailabilityStatus,
    BookingRestriction,
    BookingRestrictionType,
    DateRange,
)


def to_domain(response: Mapping[str, Any]) -> AvailabilityStatus:
    """Map a legacy calendar response to an ``AvailabilityStatus``.

    Restrictions arrive as ``"TYPE:value[:description]"`` strings.
    """
    if not isinstance(response, Mapping):
        raise ValidationError(
            "Calendar response must be an object", context={"response": repr(response)}
        )

    units = response.get("availability")
    if isinstance(units, bool) or not isinstance(units, int):
        raise ValidationError(
            "Calendar availability must be an integer", context={"availability": units}
        )
    if units < 0:
        raise ValidationError("Available units cannot be negative", context={"availability": units})

    raw_restrictions = response.get("restrictions") or []
    if not isinstance(raw_restrictions, list):
        raise ValidationError(
            "Calendar restrictions must be a list", context={"restrictions": repr(raw_restrictions)}
        )

    return AvailabilityStatus(
        is_available=units > 0,
        available_units=units,
        restrictions=[_parse_restriction(r) for r in raw_restrictions],
    )


def to_legacy(date_range: DateRange) -> dict[str, str]:
    return {
        "start_date": date_range.start_date.isoformat(),
        "end_date": date_range.end_date.isoformat(),
    }


def _parse_restriction(raw: Any) -> BookingRestriction:
    if not isinstance(raw, str):
        raise ValidationError("Malformed calendar restriction", context={"restriction": repr(raw)})
    parts = raw.split(":", 2)
    if len(parts) < 2:
        raise ValidationError("Malformed calendar restriction", context={"restriction": raw})
    kind, value = parts[0], parts[1]
    try:
        restriction_type = BookingRestrictionType(kind)
    except ValueError as e:
        raise ValidationError(
            "Unknown calendar restriction type", context={"restriction": raw}
        ) from e
    return BookingRestriction(
        type=restriction_type,
        value=value,
        description=parts[2] if len(parts) > 2 else "",
    )

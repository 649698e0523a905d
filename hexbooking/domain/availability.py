from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, model_validator

from hexbooking.core.errors import ConflictError, ValidationError


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _start_before_end(self) -> "DateRange":
        if self.start_date >= self.end_date:
            raise ValueError("Start date must be before end date")
        return self

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days


class BookingRestrictionType(str, Enum):
    min_stay = "MIN_STAY"
    max_stay = "MAX_STAY"
    check_in_day = "CHECK_IN_DAY"
    check_out_day = "CHECK_OUT_DAY"


class BookingRestriction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: BookingRestrictionType
    value: int | str
    description: str = ""


class AvailabilityStatus(BaseModel):
    is_available: bool
    available_units: int = Field(ge=0)
    restrictions: list[BookingRestriction] = Field(default_factory=list)


class Availability:
    """Available units of one property over a date range."""

    def __init__(
        self,
        property_id: str,
        date_range: DateRange,
        available_units: int,
        restrictions: list[BookingRestriction],
    ):
        self._property_id = property_id
        self._date_range = date_range
        self._available_units = available_units
        self._restrictions = restrictions

    @classmethod
    def create(
        cls,
        property_id: str,
        date_range: DateRange,
        available_units: int,
        restrictions: Iterable[BookingRestriction | dict] = (),
    ) -> "Availability":
        if not property_id or not property_id.strip():
            raise ValidationError("Property id is required")
        if available_units < 0:
            raise ValidationError("Available units cannot be negative")
        parsed = [_parse_restriction(r) for r in restrictions]
        return cls(property_id.strip(), date_range, available_units, parsed)

    @property
    def property_id(self) -> str:
        return self._property_id

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def available_units(self) -> int:
        return self._available_units

    @property
    def restrictions(self) -> list[BookingRestriction]:
        return list(self._restrictions)

    def get_status(self) -> AvailabilityStatus:
        return AvailabilityStatus(
            is_available=self._available_units > 0,
            available_units=self._available_units,
            restrictions=list(self._restrictions),
        )

    def update_available_units(self, units: int) -> None:
        if units < 0:
            raise ValidationError("Available units cannot be negative")
        self._available_units = units

    def add_restriction(self, restriction: BookingRestriction | dict) -> None:
        self._restrictions.append(_parse_restriction(restriction))


def _parse_restriction(raw: BookingRestriction | dict) -> BookingRestriction:
    if isinstance(raw, BookingRestriction):
        return raw
    try:
        return BookingRestriction.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid booking restriction", context={"errors": e.errors(include_url=False)}
        ) from e


def ranges_overlap(a: DateRange, b: DateRange) -> bool:
    """Inclusive overlap: ranges sharing only a boundary day still overlap."""
    return a.start_date <= b.end_date and b.start_date <= a.end_date


class PropertyAvailability:
    """Single-unit view of one property: free unless reserved or under maintenance."""

    def __init__(
        self,
        property_id: str,
        date_range: DateRange,
        is_reserved: bool = False,
        maintenance_block: DateRange | None = None,
    ):
        self._property_id = property_id
        self._date_range = date_range
        self._is_reserved = is_reserved
        self._maintenance_block = maintenance_block

    @classmethod
    def create(
        cls,
        property_id: str,
        date_range: DateRange,
        is_reserved: bool = False,
        maintenance_block: DateRange | None = None,
    ) -> "PropertyAvailability":
        if not property_id or not property_id.strip():
            raise ValidationError("Property id is required")
        if maintenance_block is not None and ranges_overlap(date_range, maintenance_block):
            raise ValidationError(
                "Maintenance block overlaps the requested dates",
                context={
                    "property_id": property_id,
                    "maintenance_start": maintenance_block.start_date.isoformat(),
                    "maintenance_end": maintenance_block.end_date.isoformat(),
                },
            )
        return cls(property_id.strip(), date_range, is_reserved, maintenance_block)

    @property
    def property_id(self) -> str:
        return self._property_id

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def is_reserved(self) -> bool:
        return self._is_reserved

    @property
    def maintenance_block(self) -> DateRange | None:
        return self._maintenance_block

    @property
    def is_available(self) -> bool:
        if self._is_reserved:
            return False
        if self._maintenance_block is None:
            return True
        return not ranges_overlap(self._date_range, self._maintenance_block)

    def reserve(self) -> None:
        if self._is_reserved:
            raise ConflictError(
                "Property already reserved", context={"property_id": self._property_id}
            )
        self._is_reserved = True

    def get_status(self) -> AvailabilityStatus:
        available = self.is_available
        return AvailabilityStatus(is_available=available, available_units=1 if available else 0)

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from hexbooking.core.errors import ValidationError
from hexbooking.domain.availability import DateRange

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class AvailabilityQuery(BaseModel):
    """Inbound availability check. Accepts camelCase (wire) or snake_case names."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    property_id: str = Field(alias="propertyId")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")

    @field_validator("property_id", mode="before")
    @classmethod
    def strip_property_id(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("propertyId must not be empty")
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_date_string(cls, v: Any) -> Any:
        # Only ISO dates are accepted; full ISO datetimes are truncated to their date.
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if not isinstance(v, str):
            raise ValueError(f"Invalid date: {v!r}")
        s = v.strip()
        try:
            if len(s) > 10:
                return datetime.fromisoformat(s).date()
            if not ISO_DATE_RE.fullmatch(s):
                raise ValueError(s)
            return date.fromisoformat(s)
        except ValueError:
            raise ValueError(f"Invalid date: {v!r}") from None

    @model_validator(mode="after")
    def _start_before_end(self) -> "AvailabilityQuery":
        if self.start_date >= self.end_date:
            raise ValueError("startDate must be before endDate")
        return self

    @property
    def date_range(self) -> DateRange:
        return DateRange(start_date=self.start_date, end_date=self.end_date)


class AggregatedAvailability(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_available: bool = Field(alias="isAvailable")
    reserve_system: dict[str, Any] = Field(alias="reserveSystem")
    cal_system: dict[str, Any] = Field(alias="calSystem")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def parse_query(data: AvailabilityQuery | Mapping[str, Any]) -> AvailabilityQuery:
    """Validate raw query input, raising the domain ``ValidationError`` on failure."""
    if isinstance(data, AvailabilityQuery):
        return data
    try:
        return AvailabilityQuery.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(
            format_validation_message(e.errors()),
            context={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


def format_validation_message(errors: list[Mapping[str, Any]]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(x) for x in err.get("loc", ()) if x not in ("body", "query"))
        msg = str(err.get("msg", "invalid value"))
        # pydantic prefixes messages raised from validators
        msg = msg.removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


class AvailabilityCheckIn(BaseModel):
    """Raw request body; parsing and range checks happen in ``parse_query``."""

    model_config = ConfigDict(populate_by_name=True)

    property_id: str = Field(alias="propertyId")
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")

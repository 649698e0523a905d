from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from hexbooking.core.errors import ValidationError

HHMM_PATTERN = r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$"


class TimeRestriction(BaseModel):
    start: str = Field(pattern=HHMM_PATTERN)
    end: str = Field(pattern=HHMM_PATTERN)


class Property(BaseModel):
    id: str = Field(min_length=1)
    building_id: str = Field(min_length=1)
    bedrooms: Literal[1, 2, 3, 4]
    floor: int = Field(ge=0)
    unit: str = Field(min_length=1)


class Building(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    zone: str
    properties: list[Property] = Field(default_factory=list)

    def add_property(self, prop: Property) -> None:
        if prop.building_id != self.id:
            raise ValidationError(
                "Property belongs to a different building",
                context={"property_id": prop.id, "building_id": self.id},
            )
        if any(p.id == prop.id for p in self.properties):
            raise ValidationError("Property already exists", context={"property_id": prop.id})
        self.properties.append(prop)

    def get_property(self, property_id: str) -> Property | None:
        return next((p for p in self.properties if p.id == property_id), None)


def parse_property(data: dict[str, Any]) -> Property:
    try:
        return Property.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid property", context={"errors": e.errors(include_url=False)}
        ) from e


def parse_building(data: dict[str, Any]) -> Building:
    try:
        return Building.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid building", context={"errors": e.errors(include_url=False)}
        ) from e

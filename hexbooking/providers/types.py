from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool


class ProviderPayload(BaseModel):
    """Minimum shape every availability provider must answer with."""

    model_config = ConfigDict(extra="allow")

    available: StrictBool


@dataclass(frozen=True)
class ProviderResult:
    """One provider's answer. ``payload`` is the provider's JSON object, unmodified."""

    provider: str
    available: bool
    payload: dict[str, Any] = field(default_factory=dict)

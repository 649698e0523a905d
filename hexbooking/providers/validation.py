from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from hexbooking.core.errors import ProviderError
from hexbooking.providers.types import ProviderPayload, ProviderResult


def to_provider_result(provider: str, data: dict[str, Any]) -> ProviderResult:
    """Check the common payload shape; the payload itself is passed through untouched."""
    try:
        parsed = ProviderPayload.model_validate(data)
    except PydanticValidationError as e:
        raise ProviderError(
            provider,
            f"{provider} returned an invalid availability payload",
            context={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
    return ProviderResult(provider=provider, available=parsed.available, payload=data)

"""Base schema configuration for API models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def to_camel_case(string: str) -> str:
    """Convert snake_case to camelCase."""
    head, *rest = string.split("_")
    return head + "".join(word.capitalize() for word in rest)


class APIBaseSchema(BaseModel):
    """
    Base schema for API models.

    Serializes with camelCase aliases and accepts either casing on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorDetail(APIBaseSchema):
    code: str
    message: str
    details: dict[str, Any] | None = None


class APIError(APIBaseSchema):
    """Standard API error response."""

    error: ErrorDetail

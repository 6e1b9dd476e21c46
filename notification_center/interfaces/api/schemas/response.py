"""Envelopes shared by every API response."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class APIResponse(BaseModel, Generic[T]):
    """Standard success response wrapper."""

    success: bool = True
    message: str | None = None
    data: T | None = None


class ErrorDetails(CamelModel):
    status_code: int
    fields: dict[str, str] = Field(default_factory=dict)


class ErrorBody(BaseModel):
    message: str
    details: ErrorDetails


class ErrorResponse(BaseModel):
    """Body returned for every non-2xx response."""

    success: bool = False
    error: ErrorBody
    timestamp: str
    path: str
    method: str


__all__ = ["APIResponse", "CamelModel", "ErrorBody", "ErrorDetails", "ErrorResponse"]

"""
Happy Thoughts API — Shared Response Schemas
=============================================

What:  The response envelope used by every endpoint (except the legacy
       dog-by-name lookup), the error payload, and the health/index models.

Envelope shape:
    {
        "success": true,
        "response": { ...record... } | [ ...records... ] | { "error": ... },
        "message": "Thought created"
    }
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Uniform success wrapper. Routes declare `response_model=Envelope[XResponse]`."""

    success: bool = Field(default=True, description="Whether the operation succeeded")
    response: T = Field(description="The record(s) produced by the operation")
    message: str = Field(default="", description="Human-readable summary")


class ErrorDetail(BaseModel):
    """Payload placed in `response` when `success` is false."""

    error: str = Field(description="Machine-readable error code")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Extra context")


class ErrorResponse(BaseModel):
    """Documented error envelope (OpenAPI `responses=`)."""

    success: bool = Field(default=False)
    response: ErrorDetail | List[Any]
    message: str


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class EndpointInfo(BaseModel):
    path: str
    methods: List[str]


class IndexResponse(BaseModel):
    message: str
    endpoints: List[EndpointInfo]

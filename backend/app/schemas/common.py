"""
Inkwell Backend — Shared Pydantic Schemas
===========================================

What:  Error and health response models, and the helper that maps wire
       field names (camelCase aliases) onto ORM attribute names.
"""

from typing import Optional, Type

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "Post not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


def attribute_name(schema: Type[BaseModel], wire_name: str) -> str:
    """
    Translate a client-facing field name into the model attribute name.

    Accepts either the alias ("createdAt") or the attribute ("created_at").
    Unknown names are returned unchanged so the service can reject them with
    its own list of allowed fields.
    """
    for name, info in schema.model_fields.items():
        if wire_name == name or wire_name == info.alias:
            return name
    return wire_name

"""
Portfolio API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract with the portfolio frontend.
How:   FastAPI uses these to parse request bodies, serialize responses, and
       generate the OpenAPI document.

Articles and projects are schemaless documents, so their responses are plain
JSON objects (Dict[str, Any]) rather than fixed models.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


Document = Dict[str, Any]
DocumentList = List[Document]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ContactRequest(BaseModel):
    """
    What:  Body of POST /contact.

    Every field is optional at the schema level so that a missing field is
    reported as the 400 "All fields are required" business error by
    ContactService, not as a schema error.
    """
    name: Optional[str] = Field(default=None, description="Sender's name")
    email: Optional[str] = Field(default=None, description="Sender's email address")
    message: Optional[str] = Field(default=None, description="Message body")

    model_config = ConfigDict(extra="ignore")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. {"message": "Message sent successfully!"}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every endpoint.

    Fields:
        message: Human-readable description for display to users
        error: Underlying store error text (500 responses only)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "message": "Failed to fetch articles",
            "error": "connection refused",
            "request_id": "1a2b3c4d"
        }
    """
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Underlying error (500 only)")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Service and store status returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

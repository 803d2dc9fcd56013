"""
This module defines the Pydantic models for the demo server's API responses.

These models are used by FastAPI to serialize endpoint output and to document
the response shapes in the generated OpenAPI schema.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Represents the response model for the server health check endpoint.

    Attributes:
        status: The health status of the server (e.g., 'healthy').
        version: The version number of corsgate.
        uptime: The uptime of the server in seconds.
    """

    status: str = Field(..., description="Server health status")
    version: str = Field(..., description="corsgate version")
    uptime: float | None = Field(None, description="Server uptime in seconds")

    model_config = {"json_schema_extra": {"examples": [{"status": "healthy", "version": "0.1.0", "uptime": 3600.5}]}}


class EchoResponse(BaseModel):
    """
    Represents the response of the echo endpoint.

    Attributes:
        method: The HTTP method of the request.
        origin: The request's `Origin` header, if any.
        cors_headers: The CORS headers negotiated for the request.
    """

    method: str = Field(..., description="Request method")
    origin: str | None = Field(None, description="Request Origin header")
    cors_headers: dict[str, str] = Field(default_factory=dict, description="Negotiated CORS response headers")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "method": "GET",
                    "origin": "https://app.example",
                    "cors_headers": {"access-control-allow-origin": "https://app.example", "vary": "origin"},
                }
            ]
        }
    }

"""API Envelope Schemas — transport-neutral request/response for the dispatcher.

Invariants:
    - ApiRequest carries only what the dispatcher reads: method, query, raw body
    - ApiResponse.body is JSON-serializable; headers always declare application/json

Design Decisions:
    - Decoupled from FastAPI/Starlette types: the dispatcher is testable without
      an ASGI app (ADR: ExMA impureim sandwich)
"""

from typing import Any

from pydantic import BaseModel, Field


class ApiRequest(BaseModel):
    """Inbound HTTP-shaped request."""
    http_method: str
    query_parameters: dict[str, str] = Field(default_factory=dict)
    body: str | None = None


class ApiResponse(BaseModel):
    """Outbound HTTP-shaped response."""
    status_code: int
    body: Any = None
    headers: dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": "application/json"},
    )

"""Data models for derived mock endpoints and stored projects.

OpenAPI documents and schema fragments stay plain dicts: they are arbitrary
user input and derivation has to tolerate malformed pieces of them.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MockEndpoint(BaseModel):
    """One mock endpoint derived from a (path, method) operation."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    method: str  # GET / POST / PUT / DELETE / PATCH / HEAD / OPTIONS / TRACE
    path: str  # /api/users/{id}
    summary: str | None = None
    description: str | None = None
    mock_response: Any = Field(default=None, alias="mockResponse")
    response_time: int = Field(alias="responseTime")  # milliseconds
    status_code: int = Field(alias="statusCode")
    tags: list[str] = []

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, omitting an absent summary/description."""
        data = self.model_dump(by_alias=True)
        for key in ("summary", "description"):
            if data[key] is None:
                del data[key]
        return data


class SpecInfo(BaseModel):
    """The ``info`` block of an accepted spec."""

    title: str = ""
    version: str = ""
    description: str | None = None


class Project(BaseModel):
    """A stored spec together with the endpoints last derived from it."""

    id: str
    owner_id: str
    name: str
    description: str | None = None
    spec: dict
    endpoints: list[MockEndpoint] = []
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

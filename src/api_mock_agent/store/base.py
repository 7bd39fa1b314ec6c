"""Persistence interface for projects and their derived endpoints.

Endpoints are always written as a whole set: creating a project stores its
first set, and a spec change replaces the set. Nothing is patched in place.
"""

from typing import Protocol

from api_mock_agent.parser.base import MockEndpoint, Project


class ProjectStore(Protocol):
    """The operations the project service needs from a backend."""

    def create_project_with_endpoints(
        self, spec: dict, name: str, endpoints: list[MockEndpoint], owner_id: str
    ) -> str:
        """Store a new project and return its id."""
        ...

    def replace_endpoints(self, project_id: str, endpoints: list[MockEndpoint], spec: dict | None = None) -> None:
        """Swap the endpoint set (and optionally the spec) of an existing project."""
        ...

    def delete_project(self, project_id: str) -> None:
        ...

    def list_projects(self, owner_id: str) -> list[Project]:
        """Projects owned by *owner_id*, most recently updated first."""
        ...

    def get_project(self, project_id: str) -> Project:
        ...

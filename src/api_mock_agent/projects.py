"""Project service — validates a spec, derives its endpoints and hands them to the store."""

import logging

from api_mock_agent.errors import AuthenticationRequiredError, ProjectNotFoundError
from api_mock_agent.mock.random_provider import RandomProvider
from api_mock_agent.mock.synthesizer import DEFAULT_MAX_DEPTH
from api_mock_agent.parser.base import Project
from api_mock_agent.parser.openapi import derive_endpoints
from api_mock_agent.parser.validator import ensure_valid_spec, spec_info
from api_mock_agent.store.base import ProjectStore

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Untitled API"


class ProjectService:
    """Every spec change derives a fresh endpoint set and replaces the stored one.

    Concurrent updates of the same project are not serialized here; the store
    decides, and the bundled stores keep the last write.
    """

    def __init__(self, store: ProjectStore, rng: RandomProvider | None = None, max_depth: int = DEFAULT_MAX_DEPTH):
        self.store = store
        self.rng = rng
        self.max_depth = max_depth

    def create_project(
        self, spec: dict, owner_id: str | None, name: str | None = None, default_name: str | None = None
    ) -> str:
        """Name precedence: explicit name, info.title, default_name (e.g. the file stem), "Untitled API"."""
        owner_id = _require_identity(owner_id)
        ensure_valid_spec(spec)
        endpoints = derive_endpoints(spec, rng=self.rng, max_depth=self.max_depth)
        name = name or spec_info(spec).title or default_name or DEFAULT_PROJECT_NAME

        try:
            project_id = self.store.create_project_with_endpoints(spec, name, endpoints, owner_id)
        except Exception:
            logger.exception("Failed to store new project %r", name)
            raise
        logger.info("Created project %s with %d endpoints", project_id, len(endpoints))
        return project_id

    def update_project_spec(self, project_id: str, spec: dict, owner_id: str | None) -> Project:
        owner_id = _require_identity(owner_id)
        ensure_valid_spec(spec)
        self._owned_project(project_id, owner_id)
        endpoints = derive_endpoints(spec, rng=self.rng, max_depth=self.max_depth)

        try:
            self.store.replace_endpoints(project_id, endpoints, spec=spec)
        except Exception:
            logger.exception("Failed to replace endpoints of project %s", project_id)
            raise
        logger.info("Replaced endpoints of project %s (%d endpoints)", project_id, len(endpoints))
        return self.store.get_project(project_id)

    def delete_project(self, project_id: str, owner_id: str | None) -> None:
        owner_id = _require_identity(owner_id)
        self._owned_project(project_id, owner_id)
        self.store.delete_project(project_id)
        logger.info("Deleted project %s", project_id)

    def list_projects(self, owner_id: str | None) -> list[Project]:
        return self.store.list_projects(_require_identity(owner_id))

    def get_project(self, project_id: str, owner_id: str | None) -> Project:
        return self._owned_project(project_id, _require_identity(owner_id))

    def _owned_project(self, project_id: str, owner_id: str) -> Project:
        project = self.store.get_project(project_id)
        # Other owners' projects are reported as missing, not forbidden
        if project.owner_id != owner_id:
            raise ProjectNotFoundError(project_id)
        return project


def _require_identity(owner_id: str | None) -> str:
    if not owner_id or not owner_id.strip():
        raise AuthenticationRequiredError("You must be signed in to manage projects.")
    return owner_id

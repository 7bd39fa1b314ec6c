"""In-process project store."""

import uuid
from datetime import datetime, timezone

from api_mock_agent.errors import ProjectNotFoundError
from api_mock_agent.parser.base import MockEndpoint, Project
from api_mock_agent.parser.validator import spec_info


class InMemoryProjectStore:
    """Keeps projects in a dict. Last writer wins on concurrent replaces."""

    def __init__(self):
        self._projects: dict[str, Project] = {}

    def create_project_with_endpoints(
        self, spec: dict, name: str, endpoints: list[MockEndpoint], owner_id: str
    ) -> str:
        project_id = str(uuid.uuid4())
        self._projects[project_id] = Project(
            id=project_id,
            owner_id=owner_id,
            name=name,
            description=spec_info(spec).description,
            spec=spec,
            endpoints=list(endpoints),
        )
        return project_id

    def replace_endpoints(self, project_id: str, endpoints: list[MockEndpoint], spec: dict | None = None) -> None:
        project = self.get_project(project_id)
        changes = {"endpoints": list(endpoints), "updated_at": datetime.now(timezone.utc)}
        if spec is not None:
            changes["spec"] = spec
            changes["description"] = spec_info(spec).description
        self._projects[project_id] = project.model_copy(update=changes)

    def delete_project(self, project_id: str) -> None:
        if self._projects.pop(project_id, None) is None:
            raise ProjectNotFoundError(project_id)

    def list_projects(self, owner_id: str) -> list[Project]:
        owned = [p for p in self._projects.values() if p.owner_id == owner_id]
        return sorted(owned, key=lambda p: p.updated_at, reverse=True)

    def get_project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise ProjectNotFoundError(project_id) from None

"""Project store backed by a directory of JSON files, one per project."""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from api_mock_agent.errors import ProjectNotFoundError, StoreError
from api_mock_agent.parser.base import MockEndpoint, Project
from api_mock_agent.parser.validator import spec_info

logger = logging.getLogger(__name__)


class JsonFileProjectStore:
    """Stores each project as ``<root>/<project_id>.json``.

    Writes go to a temporary file that is then renamed over the target, so a
    reader never sees a half-written project.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def create_project_with_endpoints(
        self, spec: dict, name: str, endpoints: list[MockEndpoint], owner_id: str
    ) -> str:
        project = Project(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            name=name,
            description=spec_info(spec).description,
            spec=spec,
            endpoints=list(endpoints),
        )
        self._write(project)
        return project.id

    def replace_endpoints(self, project_id: str, endpoints: list[MockEndpoint], spec: dict | None = None) -> None:
        project = self.get_project(project_id)
        changes = {"endpoints": list(endpoints), "updated_at": datetime.now(timezone.utc)}
        if spec is not None:
            changes["spec"] = spec
            changes["description"] = spec_info(spec).description
        self._write(project.model_copy(update=changes))

    def delete_project(self, project_id: str) -> None:
        path = self._path(project_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise ProjectNotFoundError(project_id) from None
        except OSError as e:
            raise StoreError(f"Failed to delete project {project_id}: {e}") from e

    def list_projects(self, owner_id: str) -> list[Project]:
        if not self.root.exists():
            return []
        projects = [self._read(path) for path in sorted(self.root.glob("*.json"))]
        owned = [p for p in projects if p.owner_id == owner_id]
        return sorted(owned, key=lambda p: p.updated_at, reverse=True)

    def get_project(self, project_id: str) -> Project:
        path = self._path(project_id)
        if not path.exists():
            raise ProjectNotFoundError(project_id)
        return self._read(path)

    def _path(self, project_id: str) -> Path:
        # Project ids are generated uuids; anything else cannot name a file here
        if not project_id or "/" in project_id or "\\" in project_id or project_id.startswith("."):
            raise ProjectNotFoundError(project_id)
        return self.root / f"{project_id}.json"

    def _read(self, path: Path) -> Project:
        try:
            return Project.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            raise StoreError(f"Failed to read project file {path}: {e}") from e

    def _write(self, project: Project) -> None:
        path = self._path(project.id)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            tmp.write_text(project.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise StoreError(f"Failed to write project {project.id}: {e}") from e
        logger.debug("Wrote project %s (%d endpoints)", project.id, len(project.endpoints))

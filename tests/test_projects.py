import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from api_mock_agent.errors import AuthenticationRequiredError, InvalidSpecError, ProjectNotFoundError, StoreError
from api_mock_agent.mock.random_provider import SystemRandomProvider
from api_mock_agent.projects import ProjectService
from api_mock_agent.store.memory import InMemoryProjectStore

FIXTURES = Path(__file__).parent / "fixtures"


def _petstore() -> dict:
    return json.loads((FIXTURES / "petstore.json").read_text(encoding="utf-8"))


def _service() -> ProjectService:
    return ProjectService(InMemoryProjectStore(), rng=SystemRandomProvider(11))


class TestCreateProject:
    def test_derives_and_stores_endpoints(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1")
        project = service.get_project(project_id, "u1")
        assert project.name == "Petstore"
        assert len(project.endpoints) == 4

    def test_explicit_name(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1", name="My pets")
        assert service.get_project(project_id, "u1").name == "My pets"

    def test_default_name_used_when_title_missing(self):
        spec = {"openapi": "3.0.0", "info": {"title": ""}, "paths": {}}
        service = _service()
        project_id = service.create_project(spec, "u1", default_name="inventory")
        assert service.get_project(project_id, "u1").name == "inventory"

    def test_title_beats_default_name(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1", default_name="petstore")
        assert service.get_project(project_id, "u1").name == "Petstore"

    def test_untitled_default(self):
        spec = {"openapi": "3.0.0", "info": {"version": "1"}, "paths": {}}
        service = _service()
        project_id = service.create_project(spec, "u1")
        assert service.get_project(project_id, "u1").name == "Untitled API"

    def test_requires_identity(self):
        store = MagicMock()
        service = ProjectService(store)
        for owner in (None, "", "  "):
            with pytest.raises(AuthenticationRequiredError):
                service.create_project(_petstore(), owner)
        store.create_project_with_endpoints.assert_not_called()

    def test_invalid_spec_never_reaches_store(self):
        store = MagicMock()
        with pytest.raises(InvalidSpecError):
            ProjectService(store).create_project({"info": {}, "paths": {}}, "u1")
        store.create_project_with_endpoints.assert_not_called()

    def test_store_failure_propagates(self):
        store = MagicMock()
        store.create_project_with_endpoints.side_effect = StoreError("disk full")
        with pytest.raises(StoreError, match="disk full"):
            ProjectService(store).create_project(_petstore(), "u1")


class TestUpdateProjectSpec:
    def test_replaces_all_endpoints(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1")
        old_ids = {e.id for e in service.get_project(project_id, "u1").endpoints}

        new_spec = {"openapi": "3.0.0", "info": {"title": "Orders"}, "paths": {"/orders": {"post": {}}}}
        updated = service.update_project_spec(project_id, new_spec, "u1")

        assert [(e.method, e.path) for e in updated.endpoints] == [("POST", "/orders")]
        assert not old_ids & {e.id for e in updated.endpoints}
        assert updated.spec == new_spec

    def test_other_owner_sees_not_found(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1")
        with pytest.raises(ProjectNotFoundError):
            service.update_project_spec(project_id, _petstore(), "u2")

    def test_invalid_spec_keeps_old_endpoints(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1")
        with pytest.raises(InvalidSpecError):
            service.update_project_spec(project_id, {"openapi": "3.0.0"}, "u1")
        assert len(service.get_project(project_id, "u1").endpoints) == 4


class TestDeleteAndList:
    def test_list_only_own_projects(self):
        service = _service()
        service.create_project(_petstore(), "u1")
        service.create_project(_petstore(), "u2")
        assert len(service.list_projects("u1")) == 1

    def test_delete(self):
        service = _service()
        project_id = service.create_project(_petstore(), "u1")
        with pytest.raises(ProjectNotFoundError):
            service.delete_project(project_id, "u2")
        service.delete_project(project_id, "u1")
        assert service.list_projects("u1") == []

    def test_list_requires_identity(self):
        with pytest.raises(AuthenticationRequiredError):
            _service().list_projects(None)

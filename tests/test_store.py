import pytest

from api_mock_agent.errors import ProjectNotFoundError, StoreError
from api_mock_agent.parser.base import MockEndpoint
from api_mock_agent.store.json_file import JsonFileProjectStore
from api_mock_agent.store.memory import InMemoryProjectStore

SPEC = {"openapi": "3.0.0", "info": {"title": "Pets", "version": "1", "description": "Pet API"}, "paths": {}}


def _endpoint(path: str) -> MockEndpoint:
    return MockEndpoint(id=path, method="GET", path=path, mock_response={}, response_time=100, status_code=200)


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryProjectStore()
    return JsonFileProjectStore(tmp_path / "projects")


class TestProjectStore:
    def test_create_and_get(self, store):
        project_id = store.create_project_with_endpoints(SPEC, "Pets", [_endpoint("/pets")], "u1")
        project = store.get_project(project_id)
        assert project.name == "Pets"
        assert project.owner_id == "u1"
        assert project.description == "Pet API"
        assert [e.path for e in project.endpoints] == ["/pets"]

    def test_replace_swaps_whole_set(self, store):
        project_id = store.create_project_with_endpoints(SPEC, "Pets", [_endpoint("/a"), _endpoint("/b")], "u1")
        new_spec = {**SPEC, "info": {"title": "Pets", "description": "v2"}}
        store.replace_endpoints(project_id, [_endpoint("/c")], spec=new_spec)

        project = store.get_project(project_id)
        assert [e.path for e in project.endpoints] == ["/c"]
        assert project.spec == new_spec
        assert project.description == "v2"
        assert project.updated_at >= project.created_at

    def test_list_by_owner_most_recent_first(self, store):
        first = store.create_project_with_endpoints(SPEC, "First", [], "u1")
        second = store.create_project_with_endpoints(SPEC, "Second", [], "u1")
        store.create_project_with_endpoints(SPEC, "Other", [], "u2")
        store.replace_endpoints(first, [_endpoint("/x")])

        assert [p.id for p in store.list_projects("u1")] == [first, second]
        assert [p.name for p in store.list_projects("u2")] == ["Other"]
        assert store.list_projects("nobody") == []

    def test_delete(self, store):
        project_id = store.create_project_with_endpoints(SPEC, "Pets", [], "u1")
        store.delete_project(project_id)
        with pytest.raises(ProjectNotFoundError):
            store.get_project(project_id)
        with pytest.raises(ProjectNotFoundError):
            store.delete_project(project_id)

    def test_unknown_project(self, store):
        with pytest.raises(ProjectNotFoundError):
            store.replace_endpoints("missing", [])


class TestJsonFileProjectStore:
    def test_files_survive_new_instance(self, tmp_path):
        project_id = JsonFileProjectStore(tmp_path).create_project_with_endpoints(SPEC, "Pets", [_endpoint("/pets")], "u1")
        assert (tmp_path / f"{project_id}.json").exists()
        project = JsonFileProjectStore(tmp_path).get_project(project_id)
        assert project.endpoints[0].path == "/pets"

    def test_path_like_ids_are_not_found(self, tmp_path):
        with pytest.raises(ProjectNotFoundError):
            JsonFileProjectStore(tmp_path).get_project("../etc/passwd")

    def test_corrupt_file_raises_store_error(self, tmp_path):
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError):
            JsonFileProjectStore(tmp_path).get_project("broken")

    def test_missing_directory_lists_nothing(self, tmp_path):
        assert JsonFileProjectStore(tmp_path / "nope").list_projects("u1") == []

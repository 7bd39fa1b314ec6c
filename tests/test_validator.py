import pytest

from api_mock_agent.errors import InvalidSpecError
from api_mock_agent.parser.validator import ensure_valid_spec, is_valid_spec, spec_info


class TestIsValidSpec:
    def test_minimal_spec_is_valid(self):
        assert is_valid_spec({"openapi": "3.0.0", "info": {"title": "x"}, "paths": {}}) is True

    def test_empty_info_object_is_accepted(self):
        assert is_valid_spec({"openapi": "3.0.0", "info": {}, "paths": {}}) is True

    def test_missing_openapi(self):
        assert is_valid_spec({"info": {}, "paths": {}}) is False

    def test_empty_openapi_string(self):
        assert is_valid_spec({"openapi": "", "info": {"title": "x"}, "paths": {}}) is False

    def test_paths_must_be_object(self):
        assert is_valid_spec({"openapi": "3.0.0", "info": {"title": "x"}, "paths": ["/a"]}) is False
        assert is_valid_spec({"openapi": "3.0.0", "info": {"title": "x"}, "paths": "/a"}) is False

    def test_non_objects(self):
        for candidate in (None, [], "openapi", 3):
            assert is_valid_spec(candidate) is False


class TestEnsureValidSpec:
    def test_returns_spec(self):
        spec = {"openapi": "3.0.0", "info": {"title": "x"}, "paths": {}}
        assert ensure_valid_spec(spec) is spec

    def test_names_missing_fields(self):
        with pytest.raises(InvalidSpecError, match="openapi, paths"):
            ensure_valid_spec({"info": {"title": "x"}})

    def test_rejects_non_object(self):
        with pytest.raises(InvalidSpecError, match="JSON object"):
            ensure_valid_spec(None)

    def test_rejects_non_object_paths(self):
        with pytest.raises(InvalidSpecError, match="'paths' must be an object"):
            ensure_valid_spec({"openapi": "3.0.0", "info": {"title": "x"}, "paths": [1]})


class TestSpecInfo:
    def test_reads_string_fields(self):
        info = spec_info({"info": {"title": "Pets", "version": "2", "description": "d"}})
        assert (info.title, info.version, info.description) == ("Pets", "2", "d")

    def test_ignores_malformed_info(self):
        assert spec_info({"info": "Pets"}).title == ""
        assert spec_info({"info": {"title": 5}}).title == ""

"""OpenAPI document -> mock endpoint derivation.

Walks every path x HTTP method of an accepted spec and builds one MockEndpoint
per operation, with a synthesized body, latency and status code.
"""

import logging
from typing import Any

from api_mock_agent.mock.random_provider import RandomProvider, SystemRandomProvider
from api_mock_agent.mock.strategies import ResponseStrategist
from api_mock_agent.mock.synthesizer import DEFAULT_MAX_DEPTH, SchemaSynthesizer, local_ref_resolver
from api_mock_agent.parser.base import MockEndpoint

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options", "trace")
SUCCESS_STATUS_CODES = ("200", "201", "204")
MIN_RESPONSE_TIME_MS = 100
MAX_RESPONSE_TIME_MS = 599


def select_response_schema(responses: Any) -> Any:
    """Return the JSON schema of the representative success response, or None.

    Looks at 200, then 201, then 204 and only at ``application/json`` content.
    Missing or malformed response maps yield None.
    """
    if not isinstance(responses, dict):
        return None

    success = next((responses[code] for code in SUCCESS_STATUS_CODES if _present(responses.get(code))), None)
    if not isinstance(success, dict):
        return None

    content = success.get("content")
    if not isinstance(content, dict):
        return None
    media_type = content.get("application/json")
    if not isinstance(media_type, dict):
        return None
    return media_type.get("schema")


def _present(entry: Any) -> bool:
    # An empty response object still counts: {"200": {}} selects 200.
    return isinstance(entry, dict) or bool(entry)


def default_status_code(method: str) -> int:
    if method == "POST":
        return 201
    if method == "DELETE":
        return 204
    return 200


class EndpointDeriver:
    """Builds the full mock endpoint list for one spec document."""

    def __init__(self, rng: RandomProvider | None = None, max_depth: int = DEFAULT_MAX_DEPTH):
        self.rng = rng or SystemRandomProvider()
        self.max_depth = max_depth

    def derive(self, spec: dict) -> list[MockEndpoint]:
        synthesizer = SchemaSynthesizer(self.rng, max_depth=self.max_depth, resolver=local_ref_resolver(spec))
        strategist = ResponseStrategist(synthesizer)

        endpoints: list[MockEndpoint] = []
        paths = spec.get("paths")
        if not isinstance(paths, dict):
            return endpoints

        for path, path_item in paths.items():
            if not isinstance(path_item, dict):
                continue
            for key, operation in path_item.items():
                # Shared parameters, $ref and vendor extensions are not operations
                if key.lower() not in HTTP_METHODS:
                    logger.debug("Skipping non-operation key %r under %s", key, path)
                    continue
                if not isinstance(operation, dict):
                    continue
                endpoints.append(self._build_endpoint(path, key.upper(), operation, strategist))

        logger.info("Derived %d mock endpoints from %d paths", len(endpoints), len(paths))
        return endpoints

    def _build_endpoint(
        self, path: str, method: str, operation: dict, strategist: ResponseStrategist
    ) -> MockEndpoint:
        schema = select_response_schema(operation.get("responses"))
        tags = operation.get("tags")

        return MockEndpoint(
            id=self.rng.token(),
            method=method,
            path=path,
            summary=_optional_str(operation.get("summary")),
            description=_optional_str(operation.get("description")),
            mock_response=strategist.generate_realistic(path, method, schema),
            response_time=self.rng.randint(MIN_RESPONSE_TIME_MS, MAX_RESPONSE_TIME_MS),
            status_code=default_status_code(method),
            tags=[str(tag) for tag in tags] if isinstance(tags, list) else [],
        )


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def derive_endpoints(
    spec: dict, rng: RandomProvider | None = None, max_depth: int = DEFAULT_MAX_DEPTH
) -> list[MockEndpoint]:
    """Derive one MockEndpoint per HTTP operation in *spec*."""
    return EndpointDeriver(rng=rng, max_depth=max_depth).derive(spec)

"""Structural gate for OpenAPI documents.

Shallow by intent: only the top-level ``openapi``, ``info`` and ``paths``
fields are checked. Schema correctness and version compatibility are not.
"""

from typing import Any

from api_mock_agent.errors import InvalidSpecError
from api_mock_agent.parser.base import SpecInfo

REQUIRED_FIELDS = ("openapi", "info", "paths")


def _present(value: Any) -> bool:
    # Containers count as present even when empty: {"paths": {}} is acceptable.
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def is_valid_spec(candidate: Any) -> bool:
    """True if openapi, info and paths are all present and paths is an object."""
    if not isinstance(candidate, dict):
        return False
    if not all(_present(candidate.get(field)) for field in REQUIRED_FIELDS):
        return False
    return isinstance(candidate["paths"], dict)


def ensure_valid_spec(candidate: Any) -> dict:
    """Return the candidate unchanged, or raise InvalidSpecError describing the problem."""
    if is_valid_spec(candidate):
        return candidate
    if not isinstance(candidate, dict):
        raise InvalidSpecError("Invalid OpenAPI specification format: expected a JSON object.")
    missing = [field for field in REQUIRED_FIELDS if not _present(candidate.get(field))]
    if missing:
        raise InvalidSpecError(f"Invalid OpenAPI specification format: missing {', '.join(missing)}.")
    raise InvalidSpecError("Invalid OpenAPI specification format: 'paths' must be an object.")


def spec_info(spec: dict) -> SpecInfo:
    """Read the info block, ignoring fields that are not strings."""
    info = spec.get("info")
    if not isinstance(info, dict):
        return SpecInfo()
    return SpecInfo(**{k: v for k, v in info.items() if k in SpecInfo.model_fields and isinstance(v, str)})

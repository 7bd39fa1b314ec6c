"""Load OpenAPI documents from files or text.

Only JSON is accepted. YAML documents are recognised so the user gets a clear
"convert to JSON" error instead of a generic parse failure.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from api_mock_agent.errors import SpecFormatError

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")

YAML_UNSUPPORTED = "YAML parsing is not supported. Please convert the specification to JSON format."


def load_spec_file(file_path: Path) -> Any:
    """Read and parse a spec file. The result is not yet validated."""
    suffix = file_path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        raise SpecFormatError(YAML_UNSUPPORTED)
    if suffix and suffix not in JSON_SUFFIXES:
        raise SpecFormatError(f"Unsupported file format '{suffix}'. Please upload a JSON file.")

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SpecFormatError(f"Could not read {file_path}: {e}") from e
    return load_spec_text(text)


def load_spec_text(text: str) -> Any:
    """Parse spec text as JSON, rejecting YAML explicitly."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        if _looks_like_yaml(text):
            raise SpecFormatError(YAML_UNSUPPORTED) from e
        raise SpecFormatError(f"Specification is not valid JSON: {e.msg} (line {e.lineno})") from e


def _looks_like_yaml(text: str) -> bool:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return False
    return isinstance(data, dict)

"""Schema-driven example value synthesis.

Turns a JSON Schema fragment into one plausible example value. Synthesis never
fails: fragments that are malformed or of unknown type degrade to simple
default values. Expansion stops at the depth limit, at the node budget, and
where a component ref recurs inside its own expansion.
"""

from collections.abc import Callable
from typing import Any

from api_mock_agent.mock.primitives import random_date, random_email, random_string
from api_mock_agent.mock.random_provider import RandomProvider, SystemRandomProvider

DEFAULT_MAX_DEPTH = 32
DEFAULT_MAX_NODES = 10_000
OPTIONAL_PROPERTY_RATE = 0.7
MIN_ARRAY_LENGTH = 1
MAX_ARRAY_LENGTH = 5
MIN_NUMBER = 1
MAX_NUMBER = 1000

# Takes a fragment carrying "$ref" and returns the referenced fragment, or None.
RefResolver = Callable[[dict], dict | None]


class SchemaSynthesizer:
    """Generates example values from schema fragments.

    Usage:
        synth = SchemaSynthesizer(SystemRandomProvider(seed=1))
        value = synth.synthesize({"type": "array", "items": {"type": "string"}})
    """

    def __init__(
        self,
        rng: RandomProvider | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        resolver: RefResolver | None = None,
        max_nodes: int = DEFAULT_MAX_NODES,
    ):
        self.rng = rng or SystemRandomProvider()
        self.max_depth = max_depth
        self.resolver = resolver
        self.max_nodes = max_nodes
        self._nodes_left = max_nodes

    def synthesize(self, schema: Any) -> Any:
        """Return one example value for the schema fragment.

        Precedence: ``example`` verbatim, then a random ``enum`` member, then
        synthesis by ``type``.
        """
        self._nodes_left = self.max_nodes
        return self._synthesize(schema, depth=0, expanding=frozenset())

    def _synthesize(self, schema: Any, depth: int, expanding: frozenset[str]) -> Any:
        if not isinstance(schema, dict):
            return random_string(self.rng)
        self._nodes_left -= 1

        ref = schema.get("$ref")
        target = self._resolve(schema)
        if target is not schema:
            # A ref already being expanded on this branch stops here
            if ref in expanding:
                return self._terminal(target)
            schema = target
            expanding = expanding | {ref}

        if "example" in schema:
            return schema["example"]

        enum = schema.get("enum")
        if isinstance(enum, list) and enum:
            return self.rng.choice(enum)

        schema_type = schema.get("type")
        if schema_type == "string":
            return self._string(schema.get("format"))
        if schema_type in ("integer", "number"):
            return self.rng.randint(MIN_NUMBER, MAX_NUMBER)
        if schema_type == "boolean":
            return self.rng.random() < 0.5
        if schema_type == "array":
            return self._array(schema, depth, expanding)
        if schema_type == "object":
            return self._object(schema, depth, expanding)

        return random_string(self.rng)

    def _resolve(self, schema: dict) -> dict:
        if self.resolver is None or "$ref" not in schema:
            return schema
        return self.resolver(schema) or schema

    def _string(self, fmt: Any) -> str:
        if fmt == "email":
            return random_email(self.rng)
        if fmt in ("date", "date-time"):
            return random_date(self.rng)
        if fmt == "uuid":
            return self.rng.token()
        return random_string(self.rng)

    def _array(self, schema: dict, depth: int, expanding: frozenset[str]) -> list:
        if depth >= self.max_depth or self._nodes_left <= 0:
            return []
        length = self.rng.randint(MIN_ARRAY_LENGTH, MAX_ARRAY_LENGTH)
        items = schema.get("items")
        if items is None:
            return [random_string(self.rng) for _ in range(length)]
        return [self._synthesize(items, depth + 1, expanding) for _ in range(length)]

    def _object(self, schema: dict, depth: int, expanding: frozenset[str]) -> dict:
        properties = schema.get("properties")
        if not isinstance(properties, dict) or not properties or depth >= self.max_depth or self._nodes_left <= 0:
            return {}

        required = schema.get("required")
        if not isinstance(required, list):
            required = []

        result = {}
        for name, prop_schema in properties.items():
            if name in required or self.rng.random() < OPTIONAL_PROPERTY_RATE:
                result[name] = self._synthesize(prop_schema, depth + 1, expanding)
        return result

    def _terminal(self, schema: dict) -> Any:
        schema_type = schema.get("type")
        if schema_type == "object":
            return {}
        if schema_type == "array":
            return []
        return random_string(self.rng)


def local_ref_resolver(spec: dict) -> RefResolver | None:
    """Build a resolver for ``#/components/schemas/<Name>`` refs in *spec*.

    Returns None when the document has no component schemas.
    """
    components = spec.get("components")
    schemas = components.get("schemas") if isinstance(components, dict) else None
    if not isinstance(schemas, dict) or not schemas:
        return None

    prefix = "#/components/schemas/"

    def resolve(fragment: dict) -> dict | None:
        ref = fragment.get("$ref")
        if not isinstance(ref, str) or not ref.startswith(prefix):
            return None
        target = schemas.get(ref[len(prefix):])
        return target if isinstance(target, dict) else None

    return resolve

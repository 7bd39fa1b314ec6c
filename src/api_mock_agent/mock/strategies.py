"""Realistic mock responses, chosen by path/method heuristics.

Strategies are tried in order and the first whose predicate matches builds the
response. The user-listing and creation heuristics deliberately ignore the
declared schema so demo APIs return familiar-looking payloads; new heuristics
can be inserted into the list without touching the existing ones.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from api_mock_agent.mock.primitives import now_iso, random_date, random_email
from api_mock_agent.mock.random_provider import RandomProvider
from api_mock_agent.mock.synthesizer import SchemaSynthesizer

DEFAULT_RESOURCE_NAME = "Resource"


@dataclass(frozen=True)
class ResponseRequest:
    """What a strategy sees: the operation's path, upper-case method and schema."""

    path: str
    method: str
    schema: Any = None

    @property
    def segments(self) -> list[str]:
        return [segment for segment in self.path.split("/") if segment]


@dataclass(frozen=True)
class ResponseStrategy:
    name: str
    matches: Callable[[ResponseRequest], bool]
    build: Callable[[ResponseRequest, SchemaSynthesizer], Any]


def resource_name(path: str) -> str:
    """Name of the resource a path addresses: its last segment minus any {placeholder}."""
    segments = [segment for segment in path.split("/") if segment]
    if not segments:
        return DEFAULT_RESOURCE_NAME
    name = _strip_placeholders(segments[-1])
    return name or DEFAULT_RESOURCE_NAME


def _strip_placeholders(segment: str) -> str:
    start = segment.find("{")
    end = segment.rfind("}")
    if start == -1 or end < start:
        return segment
    return segment[:start] + segment[end + 1:]


def _user_record(request: ResponseRequest, synth: SchemaSynthesizer) -> dict:
    rng: RandomProvider = synth.rng
    return {
        "id": rng.token(),
        "name": f"User {rng.randint(0, 999)}",
        "email": random_email(rng),
        "createdAt": random_date(rng),
        "isActive": True,
    }


def _creation_ack(request: ResponseRequest, synth: SchemaSynthesizer) -> dict:
    return {
        "success": True,
        "message": f"{resource_name(request.path)} created successfully",
        "id": synth.rng.token(),
        "timestamp": now_iso(),
    }


def _from_schema(request: ResponseRequest, synth: SchemaSynthesizer) -> Any:
    return synth.synthesize(request.schema)


def _success_envelope(request: ResponseRequest, synth: SchemaSynthesizer) -> dict:
    return {
        "success": True,
        "message": "Operation completed successfully",
        "timestamp": now_iso(),
    }


DEFAULT_STRATEGIES: tuple[ResponseStrategy, ...] = (
    ResponseStrategy(
        name="user-record",
        matches=lambda r: r.method == "GET" and "users" in r.segments,
        build=_user_record,
    ),
    ResponseStrategy(
        name="creation-ack",
        matches=lambda r: r.method == "POST",
        build=_creation_ack,
    ),
    ResponseStrategy(
        name="schema",
        matches=lambda r: r.schema is not None,
        build=_from_schema,
    ),
    ResponseStrategy(
        name="success-envelope",
        matches=lambda r: True,
        build=_success_envelope,
    ),
)


class ResponseStrategist:
    """Produces one mock body per operation using the first matching strategy."""

    def __init__(
        self,
        synthesizer: SchemaSynthesizer | None = None,
        strategies: tuple[ResponseStrategy, ...] | list[ResponseStrategy] = DEFAULT_STRATEGIES,
    ):
        self.synthesizer = synthesizer or SchemaSynthesizer()
        self.strategies = tuple(strategies)

    def select(self, request: ResponseRequest) -> ResponseStrategy | None:
        for strategy in self.strategies:
            if strategy.matches(request):
                return strategy
        return None

    def generate_realistic(self, path: str, method: str, schema: Any = None) -> Any:
        request = ResponseRequest(path=path, method=method.upper(), schema=schema)
        strategy = self.select(request)
        if strategy is None:
            return _success_envelope(request, self.synthesizer)
        return strategy.build(request, self.synthesizer)

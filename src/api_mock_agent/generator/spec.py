"""Spec generator — builds an OpenAPI document from a free-text description.

Template mode recognises a domain and a handful of resource names in the prompt
and lays out CRUD paths for each. LLM mode asks a model for the whole document.
Both return a plain dict that still has to pass the structural gate.
"""

import json
import logging
import re

from api_mock_agent.errors import SpecGenerationError
from api_mock_agent.llm import LlmClient
from api_mock_agent.mock.random_provider import RandomProvider, SystemRandomProvider
from api_mock_agent.parser.validator import is_valid_spec

logger = logging.getLogger(__name__)

MAX_ENTITIES = 5
DEFAULT_ENTITIES = ("user", "item")
SERVER_URL = "https://api.example.com/v1"

# (keywords, title); first hit wins
TITLE_RULES = (
    (("blog",), "Blog API"),
    (("ecommerce", "e-commerce", "shop"), "E-commerce API"),
    (("social",), "Social Media API"),
    (("task", "project"), "Task Management API"),
    (("restaurant", "food"), "Restaurant API"),
    (("user",), "User Management API"),
)
DEFAULT_TITLE = "Generated API"

# singular -> plural
ENTITY_PLURALS = {
    "user": "users",
    "post": "posts",
    "comment": "comments",
    "product": "products",
    "order": "orders",
    "task": "tasks",
    "project": "projects",
    "category": "categories",
    "tag": "tags",
    "review": "reviews",
    "message": "messages",
    "notification": "notifications",
    "payment": "payments",
    "cart": "carts",
    "profile": "profiles",
    "item": "items",
}

REQUIRED_FIELDS = {
    "user": ["email", "name"],
    "post": ["title", "content", "authorId"],
    "product": ["name", "price"],
    "task": ["title", "status"],
}

SYSTEM_PROMPT = """You are an API designer. Write an OpenAPI 3.0 specification for the API described by the user.

Requirements:
- Output a single JSON object (not YAML) with "openapi", "info" (title, version, description) and "paths".
- Use only get/post/put/delete/patch operations.
- Give every operation a summary, tags and a "responses" map with application/json schemas.
- Put reusable object schemas under components.schemas and reference them with $ref.

Output ONLY the JSON document, no other text."""


class SpecGenerator:
    """Generates OpenAPI documents from prompts."""

    def __init__(self, use_llm: bool = False, model: str | None = None, rng: RandomProvider | None = None):
        self.use_llm = use_llm
        self.model = model
        self.rng = rng or SystemRandomProvider()

    def generate(self, prompt: str) -> dict:
        """Return an OpenAPI document for the prompt."""
        if not prompt or not prompt.strip():
            raise SpecGenerationError("Please enter a description for your API")
        if self.use_llm:
            return self._generate_with_llm(prompt)
        return self._generate_from_template(prompt.strip())

    def _generate_with_llm(self, prompt: str) -> dict:
        client = LlmClient(model=self.model)
        response = client.call(system=SYSTEM_PROMPT, user=prompt)

        try:
            spec = json.loads(_extract_json(response))
        except json.JSONDecodeError as e:
            raise SpecGenerationError(f"Model returned invalid JSON: {e.msg}") from e
        if not is_valid_spec(spec):
            raise SpecGenerationError("Model output is not a valid OpenAPI specification.")

        logger.info("Generated spec with %d paths via %s", len(spec["paths"]), client.model)
        return spec

    def _generate_from_template(self, prompt: str) -> dict:
        lowered = prompt.lower()
        entities = detect_entities(lowered)
        logger.info("Template spec for entities: %s", ", ".join(entities))

        return {
            "openapi": "3.0.0",
            "info": {
                "title": detect_title(lowered),
                "version": "1.0.0",
                "description": prompt,
            },
            "servers": [{"url": SERVER_URL, "description": "Production server"}],
            "paths": self._paths(entities),
            "components": {"schemas": self._schemas(entities)},
        }

    def _paths(self, entities: list[str]) -> dict:
        paths = {}
        for entity in entities:
            plural = ENTITY_PLURALS[entity]
            name = entity.capitalize()
            ref = {"$ref": f"#/components/schemas/{name}"}
            id_param = {
                "name": "id",
                "in": "path",
                "required": True,
                "schema": {"type": "string"},
                "description": f"{name} ID",
            }
            not_found = {"description": f"{name} not found"}

            paths[f"/{plural}"] = {
                "get": {
                    "summary": f"Get all {plural}",
                    "description": f"Retrieve a list of all {plural}",
                    "tags": [name],
                    "parameters": [
                        {"name": "page", "in": "query", "schema": {"type": "integer", "default": 1}, "description": "Page number"},
                        {"name": "limit", "in": "query", "schema": {"type": "integer", "default": 10}, "description": "Number of items per page"},
                    ],
                    "responses": {
                        "200": _json_response("Successful response", {
                            "type": "object",
                            "properties": {
                                "data": {"type": "array", "items": ref},
                                "pagination": {
                                    "type": "object",
                                    "properties": {
                                        "page": {"type": "integer"},
                                        "limit": {"type": "integer"},
                                        "total": {"type": "integer"},
                                    },
                                },
                            },
                        }),
                    },
                },
                "post": {
                    "summary": f"Create a new {entity}",
                    "description": f"Create a new {entity}",
                    "tags": [name],
                    "requestBody": _json_body({"$ref": f"#/components/schemas/Create{name}"}),
                    "responses": {"201": _json_response("Created successfully", ref)},
                },
            }
            paths[f"/{plural}/{{id}}"] = {
                "get": {
                    "summary": f"Get {entity} by ID",
                    "description": f"Retrieve a specific {entity} by its ID",
                    "tags": [name],
                    "parameters": [id_param],
                    "responses": {"200": _json_response("Successful response", ref), "404": not_found},
                },
                "put": {
                    "summary": f"Update {entity}",
                    "description": f"Update a specific {entity}",
                    "tags": [name],
                    "parameters": [id_param],
                    "requestBody": _json_body({"$ref": f"#/components/schemas/Update{name}"}),
                    "responses": {"200": _json_response("Updated successfully", ref)},
                },
                "delete": {
                    "summary": f"Delete {entity}",
                    "description": f"Delete a specific {entity}",
                    "tags": [name],
                    "parameters": [id_param],
                    "responses": {"204": {"description": "Deleted successfully"}, "404": not_found},
                },
            }
        return paths

    def _schemas(self, entities: list[str]) -> dict:
        schemas = {}
        for entity in entities:
            name = entity.capitalize()
            timestamp = {"type": "string", "format": "date-time", "example": "2023-01-01T00:00:00Z"}
            schemas[name] = {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "example": self.rng.token()},
                    **self._entity_properties(entity),
                    "createdAt": dict(timestamp),
                    "updatedAt": dict(timestamp),
                },
                "required": ["id", "createdAt", "updatedAt"],
            }
            schemas[f"Create{name}"] = {
                "type": "object",
                "properties": self._entity_properties(entity),
                "required": REQUIRED_FIELDS.get(entity, ["name"]),
            }
            schemas[f"Update{name}"] = {
                "type": "object",
                "properties": self._entity_properties(entity),
            }
        return schemas

    def _entity_properties(self, entity: str) -> dict:
        if entity == "user":
            return {
                "email": {"type": "string", "format": "email", "example": "user@example.com"},
                "name": {"type": "string", "example": "John Doe"},
                "avatar": {"type": "string", "format": "uri", "example": "https://example.com/avatar.jpg"},
                "isActive": {"type": "boolean", "example": True},
            }
        if entity == "post":
            return {
                "title": {"type": "string", "example": "Sample Post Title"},
                "content": {"type": "string", "example": "This is the content of the post..."},
                "authorId": {"type": "string", "example": self.rng.token()},
                "published": {"type": "boolean", "example": True},
            }
        if entity == "product":
            return {
                "name": {"type": "string", "example": "Sample Product"},
                "description": {"type": "string", "example": "Product description"},
                "price": {"type": "number", "format": "float", "example": 29.99},
                "category": {"type": "string", "example": "Electronics"},
                "inStock": {"type": "boolean", "example": True},
            }
        if entity == "task":
            return {
                "title": {"type": "string", "example": "Complete project"},
                "description": {"type": "string", "example": "Task description"},
                "status": {"type": "string", "enum": ["todo", "in-progress", "completed"], "example": "todo"},
                "priority": {"type": "string", "enum": ["low", "medium", "high"], "example": "medium"},
                "assigneeId": {"type": "string", "example": self.rng.token()},
            }
        return {
            "name": {"type": "string", "example": f"Sample {entity}"},
            "description": {"type": "string", "example": f"Description for {entity}"},
        }


def detect_title(lowered_prompt: str) -> str:
    for keywords, title in TITLE_RULES:
        if any(keyword in lowered_prompt for keyword in keywords):
            return title
    return DEFAULT_TITLE


def detect_entities(lowered_prompt: str) -> list[str]:
    """Resource names mentioned in the prompt, singular, at most MAX_ENTITIES."""
    found = [
        entity
        for entity, plural in ENTITY_PLURALS.items()
        if entity in lowered_prompt or plural in lowered_prompt
    ]
    return found[:MAX_ENTITIES] or list(DEFAULT_ENTITIES)


def _json_response(description: str, schema: dict) -> dict:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _json_body(schema: dict) -> dict:
    return {"required": True, "content": {"application/json": {"schema": schema}}}


def _extract_json(text: str) -> str:
    """Extract JSON from a response that might contain Markdown code blocks."""
    match = re.search(r"```(?:json)?\s*\n(.*?)```", text, re.DOTALL)
    if match:
        return match.group(1).strip()
    return text.strip()

"""Exception types raised by api-mock-agent.

Malformed schema fragments never raise; they degrade to fallback values.
Only input rejection, generation and persistence problems surface here.
"""


class MockAgentError(Exception):
    """Base class for all api-mock-agent errors."""


class SpecFormatError(MockAgentError):
    """The spec file is not in a supported format (only JSON is accepted)."""


class InvalidSpecError(MockAgentError):
    """The document failed the structural OpenAPI gate."""


class SpecGenerationError(MockAgentError):
    """A spec could not be produced from the given prompt."""


class AuthenticationRequiredError(MockAgentError):
    """An operation that needs an authenticated identity was called without one."""


class ProjectNotFoundError(MockAgentError):
    """No project with the given id is visible to the caller."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class StoreError(MockAgentError):
    """The persistence backend failed to read or write a project."""

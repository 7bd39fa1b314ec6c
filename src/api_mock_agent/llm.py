"""LLM client wrapper around litellm.

Provides a unified interface for calling any LLM model supported by litellm.
"""

from litellm import completion

from api_mock_agent.config import settings


class LlmClient:
    """Wrapper for LLM API calls via litellm."""

    def __init__(self, model: str | None = None):
        self.model = model or settings.MODEL

    def call(self, system: str, user: str) -> str:
        """Send a system+user message to the LLM and return the response text."""
        response = completion(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        return response.choices[0].message.content

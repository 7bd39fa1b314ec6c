"""Runtime settings, read from the environment (and a local .env file)."""

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL = "claude-sonnet-4-20250514"


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


class Settings:
    """Application settings. CLI options take precedence over these."""

    MODEL: str = os.getenv("MOCK_AGENT_MODEL", DEFAULT_MODEL)
    LOG_LEVEL: str = os.getenv("MOCK_AGENT_LOG_LEVEL", "WARNING")
    STORE_DIR: str = os.getenv("MOCK_AGENT_STORE_DIR", ".mock-projects")
    MAX_SCHEMA_DEPTH: int = int(os.getenv("MOCK_AGENT_MAX_SCHEMA_DEPTH", "32"))
    SEED: int | None = _optional_int(os.getenv("MOCK_AGENT_SEED"))


settings = Settings()

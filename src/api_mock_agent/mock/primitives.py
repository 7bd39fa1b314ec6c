"""Random value primitives shared by the synthesizer and response strategies."""

import string
from datetime import datetime, timezone

from api_mock_agent.mock.random_provider import RandomProvider

ALPHANUMERIC = string.ascii_letters + string.digits
EMAIL_DOMAINS = ("gmail.com", "yahoo.com", "outlook.com", "example.com")
EARLIEST_DATE = datetime(2020, 1, 1, tzinfo=timezone.utc)


def random_string(rng: RandomProvider, length: int = 8) -> str:
    return "".join(rng.choice(ALPHANUMERIC) for _ in range(length))


def random_email(rng: RandomProvider) -> str:
    name = random_string(rng, 6).lower()
    return f"{name}@{rng.choice(EMAIL_DOMAINS)}"


def random_date(rng: RandomProvider) -> str:
    """ISO-8601 UTC timestamp uniformly sampled between 2020-01-01 and now."""
    start = EARLIEST_DATE.timestamp()
    end = datetime.now(timezone.utc).timestamp()
    moment = datetime.fromtimestamp(start + rng.random() * (end - start), tz=timezone.utc)
    return to_iso(moment)


def now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def to_iso(moment: datetime) -> str:
    # Millisecond precision with a Z suffix, e.g. 2024-05-01T10:20:30.123Z
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")

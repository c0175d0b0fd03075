"""Profile entity."""

from dataclasses import dataclass


@dataclass
class Profile:
    """Public profile of a writer, keyed by identity-provider subject."""

    id: str
    username: str
    avatar_url: str | None = None

"""Change notifier port - real-time change broadcasting."""

from typing import Any, Protocol


class ChangeNotifier(Protocol):
    """Port for announcing changes to subscribers of a topic."""

    async def publish(self, topic: str, event: str, data: dict[str, Any]) -> None: ...


def comments_topic(phase_id: object) -> str:
    """Topic carrying comment changes of one phase."""
    return f"comments:{phase_id}"


def phase_topic(phase_id: object) -> str:
    """Topic carrying content changes of one phase."""
    return f"phase:{phase_id}"

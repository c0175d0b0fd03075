"""Transient save status indicator."""

import asyncio
from collections.abc import Callable

from storyloom.domain.value_objects import SaveStatus

StatusListener = Callable[[SaveStatus], None]


class SaveStatusIndicator:
    """Tracks ``idle -> saving -> {saved, error} -> idle``.

    Terminal states fall back to idle on their own after a display window.
    Starting a new save while a terminal state is still displayed ends that
    window early.
    """

    def __init__(
        self,
        saved_display: float = 2.0,
        error_display: float = 3.0,
        listener: StatusListener | None = None,
    ) -> None:
        self._saved_display = saved_display
        self._error_display = error_display
        self._listener = listener
        self._status = SaveStatus.IDLE
        self._reset: asyncio.TimerHandle | None = None

    @property
    def status(self) -> SaveStatus:
        return self._status

    def begin(self) -> None:
        self._cancel_reset()
        self._set(SaveStatus.SAVING)

    def succeed(self) -> None:
        self._finish(SaveStatus.SAVED, self._saved_display)

    def fail(self) -> None:
        self._finish(SaveStatus.ERROR, self._error_display)

    def close(self) -> None:
        """Drop any pending return to idle."""
        self._cancel_reset()

    def _finish(self, status: SaveStatus, display: float) -> None:
        if self._status is not SaveStatus.SAVING:
            raise RuntimeError(f"Cannot move to {status} from {self._status}")
        self._set(status)
        loop = asyncio.get_running_loop()
        self._reset = loop.call_later(display, self._back_to_idle)

    def _back_to_idle(self) -> None:
        self._reset = None
        self._set(SaveStatus.IDLE)

    def _cancel_reset(self) -> None:
        if self._reset is not None:
            self._reset.cancel()
            self._reset = None

    def _set(self, status: SaveStatus) -> None:
        self._status = status
        if self._listener is not None:
            self._listener(status)

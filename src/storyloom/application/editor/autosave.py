"""Debounced autosave for the phase editor."""

import asyncio
import logging
from collections.abc import Coroutine
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from storyloom.application.dto.phase_dto import PhaseContentUpdate
from storyloom.application.editor.save_status import SaveStatusIndicator
from storyloom.application.ports import ContentStore
from storyloom.domain.exceptions import StoryloomError

logger = logging.getLogger(__name__)


class SaveOutcome(StrEnum):
    """What happened to one save request."""

    SAVED = "saved"
    UNCHANGED = "unchanged"
    SKIPPED_IN_FLIGHT = "skipped_in_flight"
    FAILED = "failed"


class AutosaveController:
    """Keeps the stored phase body eventually consistent with local edits.

    Every text change re-arms a debounce timer; when the quiet period passes
    without further edits the latest text is saved. The baseline is the last
    text the content store accepted and is the only dirty check. At most one
    save is in flight per controller: a save requested while another is
    running is dropped and reported as ``SKIPPED_IN_FLIGHT``, never queued.

    Must be driven from a running event loop.
    """

    def __init__(
        self,
        phase_id: UUID,
        store: ContentStore,
        *,
        initial_body: str = "",
        quiet_period: float = 3.0,
        status: SaveStatusIndicator | None = None,
    ) -> None:
        self._phase_id = phase_id
        self._store = store
        self._quiet_period = quiet_period
        self._draft = initial_body
        self._baseline = initial_body
        self._timer: asyncio.TimerHandle | None = None
        self._in_flight: asyncio.Task | None = None
        self._background: set[asyncio.Task] = set()
        self.status = status or SaveStatusIndicator()

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def baseline(self) -> str:
        return self._baseline

    @property
    def is_dirty(self) -> bool:
        return self._draft != self._baseline

    @property
    def is_saving(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def has_pending_autosave(self) -> bool:
        return self._timer is not None

    def on_text_change(self, text: str) -> None:
        """Replace the draft and restart the quiet period."""
        self._draft = text
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._quiet_period, self._on_quiet_period, text)

    async def save(self, text: str | None = None) -> SaveOutcome:
        """Persist ``text`` (default: the current draft) unless it is redundant."""
        if self.is_saving:
            logger.debug("Save of phase %s already in progress, skipping", self._phase_id)
            return SaveOutcome.SKIPPED_IN_FLIGHT

        resolved = self._draft if text is None else text
        if resolved == self._baseline:
            logger.debug("Phase %s unchanged, skipping save", self._phase_id)
            return SaveOutcome.UNCHANGED

        self._in_flight = asyncio.create_task(self._persist(resolved))
        return await asyncio.shield(self._in_flight)

    async def manual_save(self) -> SaveOutcome:
        """Save now, cancelling any pending autosave."""
        self._cancel_timer()
        return await self.save()

    def leave(self) -> asyncio.Task | None:
        """Best-effort save before the editor goes away.

        Returns the save task without waiting for it, or None when the draft
        is clean.
        """
        self._cancel_timer()
        if not self.is_dirty:
            return None
        return self._spawn(self.save())

    async def wait_until_idle(self) -> None:
        """Wait for the in-flight save and any triggered background saves."""
        pending = set(self._background)
        if self._in_flight is not None:
            pending.add(self._in_flight)
        if pending:
            await asyncio.wait(pending)

    def close(self) -> None:
        """Stop timers. An in-flight save is left to finish."""
        self._cancel_timer()
        self.status.close()

    async def _persist(self, text: str) -> SaveOutcome:
        self.status.begin()
        logger.debug("Saving phase %s (%d chars)", self._phase_id, len(text))
        try:
            await self._store.update(
                self._phase_id,
                PhaseContentUpdate(body=text, updated_at=datetime.now(UTC)),
            )
        except StoryloomError as e:
            logger.warning("Saving phase %s failed: %s", self._phase_id, e)
            self.status.fail()
            return SaveOutcome.FAILED
        except Exception:
            logger.exception("Unexpected error saving phase %s", self._phase_id)
            self.status.fail()
            return SaveOutcome.FAILED
        self._baseline = text
        self.status.succeed()
        return SaveOutcome.SAVED

    def _on_quiet_period(self, text: str) -> None:
        self._timer = None
        self._spawn(self.save(text))

    def _spawn(self, coro: Coroutine[Any, Any, SaveOutcome]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

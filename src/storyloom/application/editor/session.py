"""Editor session - one open phase editor."""

import asyncio
import logging
from dataclasses import dataclass
from uuid import UUID

from storyloom.application.dto.phase_dto import PhaseContent
from storyloom.application.editor.autosave import AutosaveController, SaveOutcome
from storyloom.application.editor.save_status import SaveStatusIndicator, StatusListener
from storyloom.application.ports import ContentStore
from storyloom.domain.exceptions import NotFound, PermissionDenied, StoryloomError
from storyloom.domain.value_objects import SaveStatus, TextStats

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of opening the editor."""

    content: PhaseContent | None = None
    redirect_to: str | None = None
    access_denied: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.content is not None


class EditorSession:
    """State behind the phase editor view.

    Loads the phase, decides whether the user may edit it, and routes edits
    through an :class:`AutosaveController` owned by this session.
    """

    def __init__(
        self,
        store: ContentStore,
        user_id: str,
        project_id: UUID,
        module_id: UUID,
        phase_id: UUID,
        *,
        quiet_period: float = 3.0,
        saved_display: float = 2.0,
        error_display: float = 3.0,
        on_status: StatusListener | None = None,
    ) -> None:
        self._store = store
        self._user_id = user_id
        self._project_id = project_id
        self._module_id = module_id
        self._phase_id = phase_id
        self._quiet_period = quiet_period
        self._status = SaveStatusIndicator(saved_display, error_display, on_status)
        self._content: PhaseContent | None = None
        self._controller: AutosaveController | None = None

    @property
    def parent_path(self) -> str:
        """Module listing the editor returns to."""
        return f"/projects/{self._project_id}/modules/{self._module_id}"

    @property
    def content(self) -> PhaseContent | None:
        return self._content

    @property
    def can_edit(self) -> bool:
        return self._content is not None and self._content.can_edit(self._user_id)

    @property
    def controller(self) -> AutosaveController:
        if self._controller is None:
            raise RuntimeError("Editor session is not loaded")
        return self._controller

    @property
    def text(self) -> str:
        return self.controller.draft

    @property
    def stats(self) -> TextStats:
        return TextStats.of(self.text)

    @property
    def save_status(self) -> SaveStatus:
        return self._status.status

    @property
    def can_save(self) -> bool:
        """Whether the manual save action is enabled."""
        return (
            self.can_edit
            and self._status.status is not SaveStatus.SAVING
            and self.controller.is_dirty
        )

    async def load(self) -> LoadResult:
        """Fetch the phase. A missing phase sends the user back to the module.

        Any other store failure is reported in ``LoadResult.error``; the view
        shows it and may call ``load()`` again.
        """
        try:
            content = await self._store.fetch(self._phase_id)
        except NotFound:
            logger.info("Phase %s not found, redirecting to %s", self._phase_id, self.parent_path)
            return LoadResult(redirect_to=self.parent_path)
        except PermissionDenied:
            return LoadResult(access_denied=True)
        except StoryloomError as e:
            logger.warning("Loading phase %s failed: %s", self._phase_id, e)
            return LoadResult(error=str(e))

        self._content = content
        self._controller = AutosaveController(
            self._phase_id,
            self._store,
            initial_body=content.body,
            quiet_period=self._quiet_period,
            status=self._status,
        )
        if not self.can_edit:
            return LoadResult(content=content, access_denied=True)
        return LoadResult(content=content)

    def on_text_change(self, text: str) -> None:
        if not self.can_edit:
            raise PermissionDenied("Only the project owner or assigned writer can edit")
        self.controller.on_text_change(text)

    async def manual_save(self) -> SaveOutcome:
        if not self.can_edit:
            raise PermissionDenied("Only the project owner or assigned writer can edit")
        return await self.controller.manual_save()

    def leave(self) -> asyncio.Task | None:
        """Navigate away: fire a best-effort save of unsaved text and stop timers."""
        if self._controller is None:
            return None
        task = self._controller.leave() if self.can_edit else None
        self._controller.close()
        return task

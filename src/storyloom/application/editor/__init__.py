"""Phase editor: debounced autosave and editor session state."""

from storyloom.application.editor.autosave import AutosaveController, SaveOutcome
from storyloom.application.editor.save_status import SaveStatusIndicator
from storyloom.application.editor.session import EditorSession, LoadResult

__all__ = [
    "AutosaveController",
    "EditorSession",
    "LoadResult",
    "SaveOutcome",
    "SaveStatusIndicator",
]

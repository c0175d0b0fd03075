"""Editor save status."""

from enum import StrEnum


class SaveStatus(StrEnum):
    """Transient save indicator shown next to the editor."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"

"""Word and character counts for editor text."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextStats:
    """Counts shown in the editor header."""

    words: int
    characters: int

    @classmethod
    def of(cls, text: str) -> "TextStats":
        return cls(words=len(text.split()), characters=len(text))

"""Avatar storage on the local filesystem."""

import asyncio
import mimetypes
import time
from pathlib import Path


class LocalAvatarStorage:
    """Writes avatars to ``<root>/<user_id>/avatar<ext>`` and returns a public URL."""

    def __init__(self, root_dir: str, public_url: str) -> None:
        self._root = Path(root_dir)
        self._public_url = public_url.rstrip("/")

    async def save(self, user_id: str, data: bytes, content_type: str) -> str:
        ext = mimetypes.guess_extension(content_type.split(";")[0].strip()) or ".img"
        safe_user = "".join(ch for ch in user_id if ch.isalnum() or ch in "-_") or "anonymous"
        target = self._root / safe_user / f"avatar{ext}"
        await asyncio.to_thread(self._write, target, data)
        # Cache buster so clients reload the replaced image.
        return f"{self._public_url}/{safe_user}/avatar{ext}?t={int(time.time())}"

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

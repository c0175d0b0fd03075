"""Comment entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class Comment:
    """Comment on a phase. Replies point at their top-level comment via parent_id."""

    id: UUID
    phase_id: UUID
    user_id: str
    content: str
    created_at: datetime
    parent_id: UUID | None = None
    resolved: bool = False
    author_username: str | None = None
    author_avatar_url: str | None = None


@dataclass
class CommentThread:
    """Top-level comment with its replies in creation order."""

    comment: Comment
    replies: list[Comment] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.comment.resolved


def build_threads(comments: list[Comment], include_resolved: bool = False) -> list[CommentThread]:
    """Rebuild threads from a flat list ordered by creation time.

    Replies whose parent is not in the list are dropped.
    """
    threads: list[CommentThread] = []
    replies: dict[UUID, list[Comment]] = {}
    for c in comments:
        if c.parent_id is None:
            threads.append(CommentThread(comment=c))
        else:
            replies.setdefault(c.parent_id, []).append(c)
    for thread in threads:
        thread.replies = replies.get(thread.comment.id, [])
    if include_resolved:
        return threads
    return [t for t in threads if not t.resolved]

"""Comment API resources, including the live change stream."""

from uuid import UUID

import falcon.asgi

from storyloom.application.dto.comment_dto import CommentCreateInput
from storyloom.application.ports.change_notifier import comments_topic
from storyloom.application.use_cases.comment.add_comment import AddCommentUseCase
from storyloom.application.use_cases.comment.list_comments import ListCommentThreadsUseCase
from storyloom.application.use_cases.comment.moderate_comment import (
    DeleteCommentUseCase,
    SetCommentResolvedUseCase,
)
from storyloom.domain.entities import Comment, CommentThread
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.infrastructure.realtime.broadcaster import ChangeBroadcaster
from storyloom.interfaces.api.resources.events import start_event_stream


def _comment_to_dict(c: Comment) -> dict:
    return {
        "id": str(c.id),
        "phase_id": str(c.phase_id),
        "user_id": c.user_id,
        "content": c.content,
        "parent_id": str(c.parent_id) if c.parent_id else None,
        "resolved": c.resolved,
        "created_at": c.created_at.isoformat(),
        "author_username": c.author_username,
        "author_avatar_url": c.author_avatar_url,
    }


def _thread_to_dict(t: CommentThread) -> dict:
    data = _comment_to_dict(t.comment)
    data["replies"] = [_comment_to_dict(r) for r in t.replies]
    return data


class CommentsResource:
    """GET/POST /v1/phases/{id}/comments - threads and new comments."""

    def __init__(
        self,
        list_threads: ListCommentThreadsUseCase,
        add_comment: AddCommentUseCase,
    ) -> None:
        self._list_threads = list_threads
        self._add_comment = add_comment

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        """List threads; resolved ones only with ?include_resolved=true."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            ph_id = UUID(phase_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid phase ID"}
            return
        include_resolved = req.get_param_as_bool("include_resolved") or False

        try:
            threads = await self._list_threads.execute(
                user.user_id, ph_id, include_resolved=include_resolved
            )
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase not found"}
            return

        resp.media = {"items": [_thread_to_dict(t) for t in threads]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        """Add a comment, or a reply when parent_id is given."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            parent_id = body.get("parent_id")
            content = body["content"]
            if not isinstance(content, str):
                raise TypeError("content must be a string")
            input_data = CommentCreateInput(
                phase_id=UUID(phase_id),
                content=content,
                parent_id=UUID(parent_id) if parent_id else None,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            comment = await self._add_comment.execute(user.user_id, input_data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase or parent comment not found"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _comment_to_dict(comment)
        resp.status = falcon.HTTP_201


class CommentResource:
    """PATCH/DELETE /v1/comments/{id} - resolve toggle and deletion."""

    def __init__(
        self,
        set_resolved: SetCommentResolvedUseCase,
        delete_comment: DeleteCommentUseCase,
    ) -> None:
        self._set_resolved = set_resolved
        self._delete_comment = delete_comment

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        comment_id: str,
    ) -> None:
        """Body {"resolved": bool}; an empty body toggles."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            c_id = UUID(comment_id)
            body = await req.get_media(default_when_empty={})
            resolved = body.get("resolved")
            if resolved is not None and not isinstance(resolved, bool):
                raise TypeError("resolved must be a boolean")
        except (TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            comment = await self._set_resolved.execute(user.user_id, c_id, resolved)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Comment not found"}
            return

        resp.media = _comment_to_dict(comment)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        comment_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            c_id = UUID(comment_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid comment ID"}
            return

        try:
            await self._delete_comment.execute(user.user_id, c_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Comment not found"}
            return

        resp.status = falcon.HTTP_204


class CommentsStreamResource:
    """GET /v1/phases/{id}/comments/stream - Server-Sent Events of comment changes.

    The first event is a ``snapshot`` of the current threads; afterwards every
    ``comment.*`` change on the phase is forwarded. Comment lines are sent as
    keepalives while the topic is quiet.
    """

    def __init__(
        self,
        list_threads: ListCommentThreadsUseCase,
        broadcaster: ChangeBroadcaster,
        keepalive: float = 15.0,
    ) -> None:
        self._list_threads = list_threads
        self._broadcaster = broadcaster
        self._keepalive = keepalive

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            ph_id = UUID(phase_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid phase ID"}
            return

        # Subscribe before reading the snapshot so changes made while it is
        # read are queued rather than lost.
        topic = comments_topic(ph_id)
        queue = self._broadcaster.add_subscriber(topic)
        try:
            threads = await self._list_threads.execute(
                user.user_id, ph_id, include_resolved=True
            )
        except PermissionDenied:
            self._broadcaster.remove_subscriber(topic, queue)
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            self._broadcaster.remove_subscriber(topic, queue)
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase not found"}
            return
        except Exception:
            self._broadcaster.remove_subscriber(topic, queue)
            raise

        start_event_stream(
            resp,
            self._broadcaster,
            topic,
            queue,
            "snapshot",
            {"items": [_thread_to_dict(t) for t in threads]},
            self._keepalive,
        )

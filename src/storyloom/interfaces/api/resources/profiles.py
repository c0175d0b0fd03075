"""Profile API resources."""

import falcon.asgi

from storyloom.application.use_cases.profile.ensure_profile import EnsureProfileUseCase
from storyloom.application.use_cases.profile.update_avatar import UpdateAvatarUseCase
from storyloom.domain.entities import Profile
from storyloom.domain.exceptions import ValidationError


def _profile_to_dict(profile: Profile, email: str | None = None) -> dict:
    return {
        "id": profile.id,
        "username": profile.username,
        "avatar_url": profile.avatar_url,
        "email": email,
    }


class MeResource:
    """GET /v1/me - current user's profile (created on first access)."""

    def __init__(self, ensure_profile: EnsureProfileUseCase) -> None:
        self._ensure_profile = ensure_profile

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        profile = await self._ensure_profile.execute(user.user_id, user.email, user.username)
        resp.media = _profile_to_dict(profile, user.email)
        resp.status = falcon.HTTP_200


class AvatarResource:
    """PUT /v1/me/avatar - upload profile picture (raw image body)."""

    def __init__(self, update_avatar: UpdateAvatarUseCase) -> None:
        self._update_avatar = update_avatar

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        data = await req.stream.read()
        try:
            profile = await self._update_avatar.execute(
                user.user_id, data, req.content_type or "", email=user.email
            )
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _profile_to_dict(profile, user.email)
        resp.status = falcon.HTTP_200

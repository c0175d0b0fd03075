"""Auth middleware - resolves the bearer token to a request user."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    email: str | None = None
    username: str | None = None


class AuthMiddleware:
    """Sets ``req.context.user`` from the ``Authorization: Bearer`` header.

    Missing, malformed or inactive tokens leave ``req.context.user`` as None;
    resources answer those requests with 401. CORS preflights never reach
    here because CORSMiddleware completes them first.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        req.context.user = None
        scheme, _, token = (req.get_header("Authorization") or "").partition(" ")
        if scheme.lower() != "bearer" or not token.strip() or self._keycloak is None:
            return
        user = await self._keycloak.decode_token(token.strip())
        if user is not None:
            req.context.user = RequestUser(user.user_id, user.email, user.username)

"""Keycloak OIDC token introspection."""

import asyncio
import logging
import time
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: str
    email: str | None
    username: str | None


class KeycloakProvider:
    """Resolves bearer tokens to users through the Keycloak introspection endpoint.

    The editor saves every few seconds with the same token, so positive
    results are cached until the token expires or ``cache_ttl`` passes,
    whichever comes first. Inactive tokens are never cached.
    """

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        cache_ttl: float = 30.0,
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._cache_ttl = cache_ttl
        self._cache: dict[str, tuple[float, OIDCUser]] = {}

    async def decode_token(self, token: str) -> OIDCUser | None:
        """Return the token's user, or None when it is inactive or cannot be checked."""
        now = time.monotonic()
        cached = self._cache.get(token)
        if cached and cached[0] > now:
            return cached[1]

        try:
            info = await asyncio.to_thread(self._keycloak.introspect, token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not info.get("active") or not info.get("sub"):
            self._cache.pop(token, None)
            return None

        email = info.get("email")
        user = OIDCUser(
            user_id=info["sub"],
            email=email.lower() if email else None,
            username=info.get("preferred_username"),
        )
        expires = now + self._cache_ttl
        if isinstance(info.get("exp"), (int, float)):
            expires = min(expires, now + (info["exp"] - time.time()))
        if expires > now:
            self._prune(now)
            self._cache[token] = (expires, user)
        return user

    def _prune(self, now: float) -> None:
        for key in [k for k, (expires, _) in self._cache.items() if expires <= now]:
            del self._cache[key]

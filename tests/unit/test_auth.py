"""Tests for token introspection and the auth middleware."""

import time
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from keycloak.exceptions import KeycloakAuthenticationError

from storyloom.infrastructure.auth.keycloak_provider import KeycloakProvider, OIDCUser
from storyloom.interfaces.api.middleware.auth import AuthMiddleware


def _provider(introspection, cache_ttl: float = 30.0) -> KeycloakProvider:
    provider = KeycloakProvider(
        "http://kc.test", "storyloom", "storyloom-api", "secret", cache_ttl=cache_ttl
    )
    provider._keycloak = MagicMock()
    if isinstance(introspection, Exception):
        provider._keycloak.introspect.side_effect = introspection
    else:
        provider._keycloak.introspect.return_value = introspection
    return provider


@pytest.mark.asyncio
async def test_active_token_yields_user() -> None:
    provider = _provider(
        {"active": True, "sub": "u-1", "email": "Ana@Example.com", "preferred_username": "ana"}
    )
    assert await provider.decode_token("t") == OIDCUser("u-1", "ana@example.com", "ana")


@pytest.mark.asyncio
async def test_inactive_token_is_rejected() -> None:
    assert await _provider({"active": False, "sub": "u-1"}).decode_token("t") is None


@pytest.mark.asyncio
async def test_introspection_error_is_rejected() -> None:
    provider = _provider(KeycloakAuthenticationError("bad client"))
    assert await provider.decode_token("t") is None


@pytest.mark.asyncio
async def test_active_token_is_cached() -> None:
    provider = _provider({"active": True, "sub": "u-1", "exp": time.time() + 300})

    await provider.decode_token("t")
    await provider.decode_token("t")

    provider._keycloak.introspect.assert_called_once_with("t")


@pytest.mark.asyncio
async def test_expired_token_is_not_cached() -> None:
    provider = _provider({"active": True, "sub": "u-1", "exp": time.time() - 1})

    await provider.decode_token("t")
    await provider.decode_token("t")

    assert provider._keycloak.introspect.call_count == 2


def _request(headers: dict[str, str]) -> SimpleNamespace:
    return SimpleNamespace(
        context=SimpleNamespace(),
        get_header=lambda name: headers.get(name),
    )


@pytest.mark.asyncio
async def test_middleware_sets_user_from_bearer_token() -> None:
    keycloak = AsyncMock()
    keycloak.decode_token.return_value = OIDCUser("u-1", "ana@example.com", "ana")
    req = _request({"Authorization": "Bearer abc"})

    await AuthMiddleware(keycloak).process_request(req, None)

    keycloak.decode_token.assert_awaited_once_with("abc")
    assert req.context.user.user_id == "u-1"
    assert req.context.user.email == "ana@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize("header", [None, "Basic abc", "Bearer ", "Bearer"])
async def test_middleware_without_usable_token(header) -> None:
    keycloak = AsyncMock()
    req = _request({"Authorization": header} if header else {})

    await AuthMiddleware(keycloak).process_request(req, None)

    assert req.context.user is None
    keycloak.decode_token.assert_not_awaited()

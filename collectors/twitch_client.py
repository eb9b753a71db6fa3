"""Thin async client for the two Twitch Helix endpoints we need."""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from collectors.schemas import TwitchGame, TwitchResult, TwitchStream
from core.errors import ApiParseError, ApiStatusError, ApiTransportError

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class TwitchClient:
    """Authenticated Helix client.

    Use as an async context manager; the underlying ``httpx.AsyncClient`` is
    opened on enter and closed on exit. Every failure is raised as an
    ``ApiError`` subclass so callers can tell "unreachable", "non-2xx" and
    "bad payload" apart.
    """

    def __init__(
        self,
        client_id: str,
        *,
        access_token: str = "",
        base_url: str = "https://api.twitch.tv/helix",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Client-ID": client_id}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._headers = headers
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> TwitchClient:
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def get_games(self, name: str) -> TwitchResult[TwitchGame]:
        return await self._get("games", {"name": name}, TwitchResult[TwitchGame])

    async def get_streams(
        self, game_id: str, *, first: int = 100, after: str | None = None
    ) -> TwitchResult[TwitchStream]:
        params: dict[str, str | int] = {"first": first, "game_id": game_id}
        if after:
            params["after"] = after
        return await self._get("streams", params, TwitchResult[TwitchStream])

    async def _get(
        self, endpoint: str, params: dict, model: type[ModelT]
    ) -> ModelT:
        if self._http is None:
            raise RuntimeError("TwitchClient must be used as an async context manager")

        try:
            resp = await self._http.get(f"/{endpoint}", params=params)
        except httpx.HTTPError as exc:
            raise ApiTransportError(endpoint, str(exc) or type(exc).__name__) from exc

        if not resp.is_success:
            raise ApiStatusError(endpoint, resp.status_code)

        try:
            payload = resp.json()
            result = model.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            raise ApiParseError(endpoint, str(exc)) from exc

        log.debug("GET %s %s -> %d", endpoint, params, resp.status_code)
        return result

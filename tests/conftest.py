from __future__ import annotations

from functools import partial

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from collectors.twitch_client import TwitchClient
from core.models import CollectorConfig
from data.database import get_session, init_db


class FakeHelix:
    """Serves canned Helix ``games``/``streams`` responses and records requests.

    ``stream_pages`` is a list of pages, each a list of viewer counts. Every
    page but the last carries a cursor pointing at the next one.
    """

    def __init__(
        self,
        games: list[dict] | None = None,
        stream_pages: list[list[int]] | None = None,
        *,
        games_status: int = 200,
        failing_pages: dict[int, int] | None = None,
        broken_pages: set[int] | None = None,
    ) -> None:
        self.games = games if games is not None else []
        self.stream_pages = stream_pages if stream_pages is not None else [[]]
        self.games_status = games_status
        self.failing_pages = failing_pages or {}
        self.broken_pages = broken_pages or set()
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, endpoint: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(f"/{endpoint}")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/games"):
            if self.games_status != 200:
                return httpx.Response(self.games_status, json={"error": "nope"})
            return httpx.Response(200, json={"data": self.games})
        if request.url.path.endswith("/streams"):
            return self._streams(request)
        return httpx.Response(404)

    def _streams(self, request: httpx.Request) -> httpx.Response:
        after = request.url.params.get("after")
        index = int(after.removeprefix("page-")) if after else 0

        if index in self.failing_pages:
            return httpx.Response(self.failing_pages[index], json={"error": "nope"})
        if index in self.broken_pages:
            return httpx.Response(200, content=b"<html>not json</html>")

        streams = [
            {
                "id": f"s{index}-{n}",
                "user_name": f"streamer{n}",
                "game_id": request.url.params.get("game_id"),
                "type": "live",
                "viewer_count": count,
                "started_at": "2024-03-05T12:00:00Z",
            }
            for n, count in enumerate(self.stream_pages[index])
        ]
        pagination = {}
        if index + 1 < len(self.stream_pages):
            pagination = {"cursor": f"page-{index + 1}"}
        return httpx.Response(200, json={"data": streams, "pagination": pagination})


@pytest.fixture
def config() -> CollectorConfig:
    return CollectorConfig(
        client_id="test-client-id",
        category_name="Foo",
        base_url="https://api.twitch.test/helix",
    )


@pytest.fixture
async def session_scope(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'viewers.db'}")
    await init_db(engine)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    yield partial(get_session, factory)
    await engine.dispose()


@pytest.fixture
def helix() -> FakeHelix:
    return FakeHelix()


@pytest.fixture
def make_client(config):
    def _make(helix: FakeHelix, **kwargs) -> TwitchClient:
        return TwitchClient(
            config.client_id,
            base_url=config.base_url,
            transport=helix.transport,
            **kwargs,
        )

    return _make

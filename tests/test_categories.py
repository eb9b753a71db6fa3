from __future__ import annotations

import pytest

from collectors.categories import resolve_category
from core.errors import ApiParseError, ApiStatusError, CategoryNotFound


async def test_returns_first_match(helix, make_client):
    helix.games = [
        {"id": "42", "name": "Foo", "box_art_url": ""},
        {"id": "43", "name": "Foo", "box_art_url": ""},
    ]
    async with make_client(helix) as client:
        game = await resolve_category(client, "Foo")

    assert game.id == "42"
    assert game.name == "Foo"
    assert len(helix.requests_to("games")) == 1


async def test_no_match_raises_not_found(helix, make_client):
    helix.games = []
    async with make_client(helix) as client:
        with pytest.raises(CategoryNotFound) as exc_info:
            await resolve_category(client, "Bar")

    assert exc_info.value.name == "Bar"
    assert "Bar" in str(exc_info.value)


async def test_status_error_is_not_retried(helix, make_client):
    helix.games_status = 500
    async with make_client(helix) as client:
        with pytest.raises(ApiStatusError) as exc_info:
            await resolve_category(client, "Foo")

    assert exc_info.value.status_code == 500
    assert len(helix.requests) == 1


async def test_malformed_lookup_is_a_parse_error(helix, make_client):
    helix.games = [{"name": "Foo"}]
    async with make_client(helix) as client:
        with pytest.raises(ApiParseError) as exc_info:
            await resolve_category(client, "Foo")

    assert not isinstance(exc_info.value, ApiStatusError)
    assert exc_info.value.endpoint == "games"
    assert helix.requests_to("streams") == []

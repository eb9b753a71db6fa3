from __future__ import annotations

import logging

from collectors.schemas import TwitchGame
from collectors.twitch_client import TwitchClient
from core.errors import CategoryNotFound

log = logging.getLogger(__name__)


async def resolve_category(client: TwitchClient, name: str) -> TwitchGame:
    """Look up a category by exact name and return the first match.

    Raises ``CategoryNotFound`` when Twitch knows no category by that name.
    API failures propagate from the client untouched.
    """
    result = await client.get_games(name)
    if not result.items:
        raise CategoryNotFound(name)

    game = result.items[0]
    log.debug("Resolved category %r to id %s", name, game.id)
    return game

from __future__ import annotations

import logging

from collectors.twitch_client import TwitchClient

log = logging.getLogger(__name__)

# Safety bound against runaway pagination, not a known maximum.
PAGE_LIMIT = 20
PAGE_SIZE = 100


async def aggregate_viewers(
    client: TwitchClient, category_id: str, *, page_limit: int = PAGE_LIMIT
) -> int:
    """Sum ``viewer_count`` over every live stream in a category.

    Pages are fetched one after another, following the cursor until Helix
    stops returning one or ``page_limit`` pages have been read. Any API error
    propagates: a partial sum is never returned.
    """
    total = 0
    cursor: str | None = None
    pages_fetched = 0

    while pages_fetched < page_limit:
        page = await client.get_streams(category_id, first=PAGE_SIZE, after=cursor)
        total += sum(stream.viewer_count for stream in page.items)
        log.debug(
            "Category %s page %d: %d streams, running total %d",
            category_id, pages_fetched + 1, len(page.items), total,
        )

        if page.cursor is None:
            break
        cursor = page.cursor
        pages_fetched += 1
    else:
        log.warning(
            "Stopped after %d pages for category %s; total %d may be incomplete",
            page_limit, category_id, total,
        )

    return total

"""One collection run: resolve the category, sum its viewers, build a sample."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime, timezone

import httpx

from collectors.aggregator import PAGE_LIMIT, aggregate_viewers
from collectors.categories import resolve_category
from collectors.twitch_client import TwitchClient
from core.errors import (
    ApiError,
    ApiParseError,
    ApiStatusError,
    CategoryNotFound,
    ConfigurationError,
)
from core.models import CollectorConfig, CollectResult, ViewerSample

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ViewerCollector:
    """Runs the resolve -> aggregate pipeline once per ``collect`` call.

    Run-level failures are logged and folded into the returned
    ``CollectResult``; nothing raised here escapes into the scheduler.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] = _utcnow,
        page_limit: int = PAGE_LIMIT,
    ) -> None:
        self._transport = transport
        self._clock = clock
        self._page_limit = page_limit

    async def collect(self, config: CollectorConfig) -> CollectResult:
        t0 = time.monotonic()
        result = CollectResult(status="failed", category_name=config.category_name)

        try:
            config.validate()
        except ConfigurationError as exc:
            log.error("%s. Exiting.", exc)
            result.error = str(exc)
            return result

        try:
            async with TwitchClient(
                config.client_id,
                access_token=config.access_token,
                base_url=config.base_url,
                timeout=config.timeout,
                transport=self._transport,
            ) as client:
                game = await resolve_category(client, config.category_name)
                result.category_id = game.id
                total = await aggregate_viewers(
                    client, game.id, page_limit=self._page_limit
                )
        except CategoryNotFound as exc:
            log.warning("%s", exc)
            result.status = "not_found"
            result.error = str(exc)
        except ApiError as exc:
            if isinstance(exc, ApiStatusError):
                log.error(
                    "Twitch API call (%s) was not successful. HTTP CODE: %d",
                    exc.endpoint, exc.status_code,
                )
            elif isinstance(exc, ApiParseError):
                log.error(
                    "Could not parse results from Twitch (%s): %s",
                    exc.endpoint, exc.detail,
                )
            else:
                log.error("Twitch API call failed: %s", exc)
            result.error = str(exc)
        else:
            result.status = "success"
            result.sample = ViewerSample.at(
                self._clock(),
                total,
                category_id=game.id,
                category_name=game.name or config.category_name,
            )

        result.duration_seconds = time.monotonic() - t0
        return result

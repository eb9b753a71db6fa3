from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from core.errors import ConfigurationError


@dataclass(frozen=True)
class CollectorConfig:
    """Everything a single collection run needs, read once at run start."""

    client_id: str
    category_name: str
    access_token: str = ""
    base_url: str = "https://api.twitch.tv/helix"
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings) -> CollectorConfig:
        return cls(
            client_id=settings.TWITCH_CLIENT_ID.strip(),
            category_name=settings.TWITCH_GAME_NAME.strip(),
            access_token=settings.TWITCH_ACCESS_TOKEN.strip(),
            base_url=settings.TWITCH_API_BASE_URL,
            timeout=settings.TWITCH_REQUEST_TIMEOUT,
        )

    def validate(self) -> None:
        if not self.client_id.strip() or not self.category_name.strip():
            raise ConfigurationError("ClientId or Game Name was not found")


@dataclass(frozen=True)
class ViewerSample:
    """Aggregate viewer count for one (date, hour) slot."""

    date_key: str  # YYYY-MM-DD
    hour_key: str  # "0".."23", not zero-padded
    viewers: int
    category_id: str
    category_name: str
    collected_at: datetime

    @classmethod
    def at(
        cls,
        timestamp: datetime,
        viewers: int,
        *,
        category_id: str,
        category_name: str,
    ) -> ViewerSample:
        ts = timestamp.astimezone(timezone.utc)
        return cls(
            date_key=ts.strftime("%Y-%m-%d"),
            hour_key=str(ts.hour),
            viewers=viewers,
            category_id=category_id,
            category_name=category_name,
            collected_at=ts,
        )


@dataclass
class CollectResult:
    """Outcome of a single collection run."""

    status: str  # "success", "not_found", "failed"
    category_name: str
    category_id: str | None = None
    sample: ViewerSample | None = None
    error: str = ""
    duration_seconds: float = 0.0

    @property
    def viewers(self) -> int | None:
        return self.sample.viewers if self.sample else None

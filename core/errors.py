from __future__ import annotations


class CollectorError(Exception):
    """Base class for everything that can end a collection run."""


class ConfigurationError(CollectorError):
    pass


class CategoryNotFound(CollectorError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No category with the name {name} found")
        self.name = name


class ApiError(CollectorError):
    """A Helix call did not yield a usable response."""

    def __init__(self, endpoint: str, message: str) -> None:
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint


class ApiStatusError(ApiError):
    def __init__(self, endpoint: str, status_code: int) -> None:
        super().__init__(endpoint, f"HTTP {status_code}")
        self.status_code = status_code


class ApiParseError(ApiError):
    def __init__(self, endpoint: str, detail: str) -> None:
        super().__init__(endpoint, f"could not parse response ({detail})")
        self.detail = detail


class ApiTransportError(ApiError):
    """The request never produced an HTTP response (connect error, timeout)."""

    def __init__(self, endpoint: str, detail: str) -> None:
        super().__init__(endpoint, f"request failed ({detail})")
        self.detail = detail

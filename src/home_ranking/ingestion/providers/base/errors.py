from __future__ import annotations


class ProviderError(RuntimeError):
    """Base exception for every failure while building a ranking response."""


class UpstreamUnavailable(ProviderError):
    """An upstream endpoint could not be reached or did not answer with HTTP 200."""


class TransportError(UpstreamUnavailable):
    """Request construction or network failure (DNS, connect, read, etc.)."""


class UpstreamStatusError(UpstreamUnavailable):
    """Upstream answered with a non-200 status."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"status code: {status_code} for {url}")
        self.status_code = status_code
        self.url = url


class DecodeError(ProviderError):
    """Response body was not valid JSON or did not have the expected shape."""


class MalformedTimestamp(ProviderError):
    """A season start/end string did not match the upstream date format."""


class NoActiveSeason(ProviderError):
    """No season window contains the current instant (e.g. between seasons)."""


class ShortRanking(ProviderError):
    """Ranking feed returned fewer rows than the guaranteed top-N."""

    def __init__(self, count: int, required: int) -> None:
        super().__init__(f"top {required} ranking data is less than {required} (got {count})")
        self.count = count
        self.required = required

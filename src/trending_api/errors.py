"""Error kinds raised by the ranking engine.

Routes translate these into HTTP responses: ``UpstreamFetchError`` is a
server-side failure (502), ``InvalidTabError`` is a caller mistake (400).
"""


class TrendingError(Exception):
    """Base class for feed errors."""


class UpstreamFetchError(TrendingError):
    """The metric source could not produce a candidate snapshot."""


class InvalidTabError(TrendingError):
    """A feed was requested with a tab it does not recognise."""

    def __init__(self, feed: str, tab: str, allowed: list[str]):
        self.feed = feed
        self.tab = tab
        self.allowed = allowed
        super().__init__(
            f"Unknown {feed} tab '{tab}' (expected one of: {', '.join(allowed)})"
        )

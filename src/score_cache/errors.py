"""Exception taxonomy for the score-indexed cache.

Every error raised by this package derives from ScoreCacheError, so
callers can branch on the error type rather than on message text:

    try:
        value = await cache.get("item1")
    except NotFoundError:
        value = None  # expired or never written, an expected outcome

Some errors also subclass the closest builtin (ValueError, LookupError,
...) so generic handlers keep working.
"""


class ScoreCacheError(Exception):
    """Base class for all score cache errors."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class CacheConnectionError(ScoreCacheError, ConnectionError):
    """Store unreachable or authentication failed at construction time."""


class ValidationError(ScoreCacheError, ValueError):
    """Caller input rejected before any network call."""


class EncodingError(ScoreCacheError, TypeError):
    """Value cannot be represented in (or read back from) the wire format."""


class StoreError(ScoreCacheError):
    """Transport or protocol failure talking to the store."""


class IndexWriteError(StoreError):
    """The ordered-index half of a write failed.

    The primary table was not touched.
    """


class ValueWriteError(StoreError):
    """The primary-table half of a write failed.

    The index entry written just before is left in place.
    """


class NotFoundError(ScoreCacheError, LookupError):
    """Key expired or was never written."""


class ClosedError(ScoreCacheError, RuntimeError):
    """Operation attempted on a closed cache."""

"""Exception hierarchy for the crawler."""

from typing import Optional, Sequence


class CrawlerError(Exception):
    """Base class for crawler failures."""


class HTTPFetchError(CrawlerError):
    """A single HTTP request failed after the retry envelope was exhausted."""

    def __init__(self, url: str, message: str, status: Optional[int] = None):
        self.url = url
        self.status = status
        super().__init__(f"{message} ({url})")


class FetchFailure(CrawlerError):
    """Both the primary and the fallback locale request failed."""

    def __init__(
        self,
        path: str,
        urls: Sequence[str],
        last_error: Optional[BaseException] = None,
    ):
        self.path = path
        self.urls = list(urls)
        self.last_error = last_error
        super().__init__(f"Failed to fetch {path}: {last_error}")


class LuaParseError(CrawlerError):
    """The wiki table literal does not follow the expected grammar."""

    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(f"{message} at position {position}")


class PersistenceFailure(CrawlerError):
    """Writing or reading the local output tree failed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")

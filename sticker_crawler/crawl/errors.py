"""Exceptions raised by the crawler. Every one of them aborts the run."""


class CrawlError(Exception):
    """Base class for all crawl failures."""


class RequestError(CrawlError):
    """Bad URL, transport failure or a non-2xx response."""


class DecodeError(CrawlError):
    """Response body could not be decoded into the expected shape."""


class StorageError(CrawlError):
    """Local filesystem failure (stat, mkdir, create or write)."""

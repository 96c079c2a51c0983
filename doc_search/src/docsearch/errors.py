from __future__ import annotations


class SearchError(Exception):
    """Base class for failures raised by the storage and I/O adapters."""


class ExtractionError(SearchError):
    """A file (or folder) could not be read or flattened into text."""
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class IndexFileError(SearchError):
    """A snapshot file could not be opened, parsed or written."""
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not use index file {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedStoreError(SearchError, ValueError):
    def __init__(self, dsn: str) -> None:
        super().__init__(f"Unsupported store DSN: {dsn}")
        self.dsn = dsn


class IndexSourceError(SearchError, ValueError):
    """No usable index source (snapshot file or sqlite:/// DSN) was given."""

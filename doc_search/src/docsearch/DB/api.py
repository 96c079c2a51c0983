# docsearch/DB/api.py
from __future__ import annotations
import logging
from typing import Protocol, Iterator, List, Mapping, Optional

from ..models import Corpus, Document, SearchResult
from ..errors import UnsupportedStoreError

log = logging.getLogger(__name__)


class IndexStore(Protocol):
    # Write
    def add_document(self, key: str, characters: str) -> Document: ...
    # Query
    def search_query(self, query: str, *, top_k: Optional[int] = None) -> List[SearchResult]: ...
    def document_count(self) -> int: ...
    # Delete
    def clear(self) -> None: ...
    # Snapshot support
    def iter_documents(self) -> Iterator[Document]: ...
    def document_frequencies(self) -> Mapping[str, int]: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str, *, corpus: Optional[Corpus] = None) -> IndexStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (schema created if missing; when a corpus is
                          given, it replaces whatever the database held)
      - memory://      -> MemoryStore (wraps corpus when given)
    """
    if dsn.startswith("sqlite:///"):
        from .sqlite_store import SQLiteStore
        store = SQLiteStore(dsn.removeprefix("sqlite:///"))
        if corpus is not None:
            stale = store.document_count()
            if stale:
                log.warning("Replacing %d documents in %s with the given corpus", stale, dsn)
            store.replace_with(corpus)
        return store

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore(corpus=corpus)

    raise UnsupportedStoreError(dsn)

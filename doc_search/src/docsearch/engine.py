# docsearch/engine.py
from __future__ import annotations

import os
import logging
from typing import Iterable, List, Optional

from . import config as CFG
from .models import Document, SearchResult
from .errors import IndexSourceError
from .loader import iter_documents
from .DB.api import IndexStore, make_store
from .DB.snapshot import save_snapshot, load_corpus

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the folder walker / content extraction (loader.iter_documents),
      - an IndexStore (in-memory Corpus or SQLite tables),
      - JSON snapshots (DB.snapshot).

    Public API (used by CLI/Flask):
      * build(roots, ...): walk -> index -> (optional) save snapshot
      * load(...):         open a snapshot or an existing SQLite index
      * search(query, top_k): ranked (path, score) results
      * shutdown():        close underlying resources

    Storage DSNs (via docsearch.DB.api.make_store):
      - "sqlite:///path/to/index.sqlite"
      - "memory://"
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self._store: Optional[IndexStore] = None

    @property
    def store(self) -> IndexStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        return self._store

    @property
    def ready(self) -> bool:
        return self._store is not None

    # /* ~~~ Index source folders into a fresh store ~~~ */
    def build(
        self,
        roots: Iterable[str],
        *,
        db_dsn: Optional[str] = None,          # e.g., "sqlite:///./index.sqlite" or "memory://"
        index_out: Optional[str] = None,       # JSON snapshot path to write after indexing
        verbose: bool = False,
    ) -> int:
        roots = list(roots)
        if not roots:
            raise ValueError("build(): at least one root folder is required")

        prev_verbose = os.environ.get("DOCSEARCH_VERBOSE")
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["DOCSEARCH_VERBOSE"] = "1"

        dsn = db_dsn or CFG.DEFAULT_DSN
        log.info("Initializing index store: %s", dsn)
        store = make_store(dsn)

        try:
            # documents left over from an earlier build must not survive this one
            store.clear()
            for path, content in iter_documents(roots):
                log.info("Indexing %s...", path)
                store.add_document(path, content)
        except BaseException:
            store.close()
            raise
        finally:
            if verbose:
                if prev_verbose is None:
                    os.environ.pop("DOCSEARCH_VERBOSE", None)
                else:
                    os.environ["DOCSEARCH_VERBOSE"] = prev_verbose

        self.shutdown()
        self._store = store

        if index_out:
            self.save(index_out)

        log.info("Engine build() complete: documents=%d", store.document_count())
        return store.document_count()

    # /* ~~~ Open an already-built index ~~~ */
    def load(
        self,
        *,
        index: Optional[str] = None,           # JSON snapshot (takes precedence)
        db_dsn: Optional[str] = None,          # sqlite:/// DSN; with `index`, the store to load into
        verbose: bool = False,
    ) -> int:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        if index:
            log.info("Reading %s index file...", index)
            corpus = load_corpus(index)
            dsn = db_dsn or CFG.DEFAULT_DSN
        elif db_dsn and db_dsn.startswith("sqlite:///"):
            corpus = None
            dsn = db_dsn
        else:
            raise IndexSourceError("load(): require either an index file or a sqlite:/// DSN")

        log.info("Initializing index store: %s", dsn)
        store = make_store(dsn, corpus=corpus)
        self.shutdown()
        self._store = store
        log.info("Engine load() complete: documents=%d", store.document_count())
        return store.document_count()

    # ------------- indexing / query -------------

    def add_document(self, key: str, content: str) -> Document:
        return self.store.add_document(key, content)

    def search(self, query: str, *, top_k: Optional[int] = CFG.TOP_K) -> List[SearchResult]:
        return self.store.search_query(query, top_k=top_k)

    def document_count(self) -> int:
        return self.store.document_count()

    # /* ~~~ Persist the current store as a JSON snapshot ~~~ */
    def save(self, path: str) -> None:
        store = self.store
        log.info("Saving %s...", path)
        save_snapshot(store.iter_documents(), store.document_frequencies(), path)

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, etc.) ~~~ */
    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            log.info("Engine shutdown complete")

# docsearch/DB/sqlite_store.py
from __future__ import annotations
import os
import sqlite3
import threading
from collections import Counter, defaultdict
from typing import Dict, Iterator, List, Mapping, Optional
from .api import IndexStore
from ..lexer import Lexer
from ..models import Corpus, Document, SearchResult
from ..scoring import term_frequency, inverse_document_frequency
from ..search import query_terms, rank

# Three tables mirror the in-memory model:
#   documents : path -> total term count (n)
#   term_freq : (term, path) -> occurrences
#   doc_freq  : term -> number of documents containing it
_SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
  path TEXT PRIMARY KEY,
  term_count INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS term_freq (
  term TEXT NOT NULL,
  path TEXT NOT NULL REFERENCES documents(path),
  count INTEGER NOT NULL,
  PRIMARY KEY (term, path)
);
CREATE INDEX IF NOT EXISTS term_freq_path ON term_freq(path);
CREATE TABLE IF NOT EXISTS doc_freq (
  term TEXT PRIMARY KEY,
  count INTEGER NOT NULL
);
"""

_UPSERT_DF = (
    "INSERT INTO doc_freq(term, count) VALUES (?, 1) "
    "ON CONFLICT(term) DO UPDATE SET count = count + 1"
)

class SQLiteStore(IndexStore):
    """
    Relational backend. Scoring uses the same TF-IDF functions as the
    in-memory path, fed from one aggregate lookup per distinct query term.
    A single connection is shared; the lock serializes every statement.
    """
    def __init__(self, db_path: str) -> None:
        self.db_path = os.path.abspath(db_path)
        os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
        self.conn: sqlite3.Connection = sqlite3.connect(self.db_path, check_same_thread=False)
        self._lock = threading.Lock()
        self.conn.executescript(_SCHEMA)

    # ---- Write ----
    def add_document(self, key: str, characters: str) -> Document:
        counts = Counter(Lexer(characters))
        doc = Document(key=key, n=sum(counts.values()), counts=dict(counts))
        with self._lock, self.conn:
            self._retract(key)
            self._insert(doc)
            self.conn.executemany(_UPSERT_DF, [(t,) for t in doc.counts])
        return doc

    def replace_with(self, corpus: Corpus) -> int:
        """Drop every stored row and copy `corpus` (documents and df as-is) in one transaction."""
        with self._lock, self.conn:
            self._delete_all()
            self._bulk_insert(corpus)
        return corpus.document_count()

    def _bulk_insert(self, corpus: Corpus) -> None:
        for doc in corpus:
            self._retract(doc.key)
            self._insert(doc)
        self.conn.executemany(
            "INSERT INTO doc_freq(term, count) VALUES (?, ?) "
            "ON CONFLICT(term) DO UPDATE SET count = count + excluded.count",
            list(corpus.df.items()),
        )

    # ---- Delete ----
    def clear(self) -> None:
        with self._lock, self.conn:
            self._delete_all()

    def _delete_all(self) -> None:
        self.conn.execute("DELETE FROM doc_freq")
        self.conn.execute("DELETE FROM term_freq")
        self.conn.execute("DELETE FROM documents")

    def _insert(self, doc: Document) -> None:
        self.conn.execute(
            "INSERT INTO documents(path, term_count) VALUES (?, ?)", (doc.key, doc.n)
        )
        self.conn.executemany(
            "INSERT INTO term_freq(term, path, count) VALUES (?, ?, ?)",
            [(t, doc.key, c) for t, c in doc.counts.items()],
        )

    def _retract(self, key: str) -> None:
        """Undo a previous indexing of `key` (its df contributions included)."""
        self.conn.execute(
            "UPDATE doc_freq SET count = count - 1 "
            "WHERE term IN (SELECT term FROM term_freq WHERE path = ?)", (key,)
        )
        self.conn.execute("DELETE FROM doc_freq WHERE count <= 0")
        self.conn.execute("DELETE FROM term_freq WHERE path = ?", (key,))
        self.conn.execute("DELETE FROM documents WHERE path = ?", (key,))

    # ---- Query ----
    def search_query(self, query: str, *, top_k: Optional[int]=None) -> List[SearchResult]:
        terms = query_terms(query)
        if not terms:
            return []
        with self._lock:
            N = self._count()
            scores: Dict[str, float] = defaultdict(float)
            for t in terms:
                row = self.conn.execute("SELECT count FROM doc_freq WHERE term = ?", (t,)).fetchone()
                idf = inverse_document_frequency(t, N, {t: row[0]} if row else {})
                rows = self.conn.execute(
                    "SELECT tf.path, d.term_count, tf.count FROM term_freq tf "
                    "JOIN documents d ON d.path = tf.path WHERE tf.term = ?", (t,)
                )
                for path, n, count in rows:
                    scores[path] += term_frequency(t, n, {t: count}) * idf
        return rank(scores.items(), top_k)

    def document_count(self) -> int:
        with self._lock:
            return self._count()

    def _count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM documents").fetchone()[0]

    # ---- Snapshot support ----
    def iter_documents(self) -> Iterator[Document]:
        with self._lock:
            docs = self.conn.execute("SELECT path, term_count FROM documents ORDER BY path").fetchall()
            rows = self.conn.execute("SELECT path, term, count FROM term_freq").fetchall()
        per_doc: Dict[str, Dict[str, int]] = defaultdict(dict)
        for path, term, count in rows:
            per_doc[path][term] = count
        for path, n in docs:
            yield Document(key=path, n=n, counts=per_doc.get(path, {}))

    def document_frequencies(self) -> Mapping[str, int]:
        with self._lock:
            return dict(self.conn.execute("SELECT term, count FROM doc_freq"))

    # ---- lifecycle ----
    def close(self) -> None:
        with self._lock:
            self.conn.close()

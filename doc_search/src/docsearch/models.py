from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Optional

from .lexer import Lexer


@dataclass
class Document:
    key: str                  # opaque stable id (file path for folder indexing)
    n: int                    # total term occurrences; always sum(counts.values())
    counts: Dict[str, int]    # term -> raw occurrence count

    @classmethod
    def from_counts(cls, key: str, counts: Mapping[str, int]) -> "Document":
        counts = {t: int(c) for t, c in counts.items() if int(c) > 0}
        return cls(key=key, n=sum(counts.values()), counts=counts)


@dataclass
class Corpus:
    """
    In-memory frequency model: per-document term counts plus corpus-wide
    document frequencies. Construct empty, feed with add_document(), then query.

    Invariant: df[t] == number of documents whose counts contain t.
    Not thread-safe; callers serialize writes against reads.
    """
    documents: Dict[str, Document] = field(default_factory=dict)
    df: Dict[str, int] = field(default_factory=dict)

    # ---- mutation ----
    def add_document(self, key: str, characters: str) -> Document:
        counts = Counter(Lexer(characters))
        doc = Document(key=key, n=sum(counts.values()), counts=dict(counts))
        self.put(doc)
        return doc

    def put(self, doc: Document) -> None:
        """Insert a pre-counted document, replacing any previous one under the same key."""
        if doc.key in self.documents:
            self._retract(self.documents[doc.key])
        for t in doc.counts:
            self.df[t] = self.df.get(t, 0) + 1
        self.documents[doc.key] = doc

    def _retract(self, old: Document) -> None:
        for t in old.counts:
            m = self.df.get(t, 0) - 1
            if m > 0:
                self.df[t] = m
            else:
                self.df.pop(t, None)

    # ---- read ----
    def document_count(self) -> int:
        return len(self.documents)

    def document_frequency(self, term: str) -> int:
        return self.df.get(term, 0)

    def get(self, key: str) -> Optional[Document]:
        return self.documents.get(key)

    def __len__(self) -> int:
        return len(self.documents)

    def __contains__(self, key: object) -> bool:
        return key in self.documents

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents.values())

    # ---- (de)serialization helpers ----
    @classmethod
    def from_counts(cls, tfpd: Mapping[str, Mapping[str, int]],
                    df: Optional[Mapping[str, int]] = None) -> "Corpus":
        """
        Rebuild a corpus from {key: {term: count}}. When `df` is given it is
        taken as-is (snapshot fidelity); otherwise it is recomputed.
        """
        corpus = cls()
        if df is None:
            for key, counts in tfpd.items():
                corpus.put(Document.from_counts(key, counts))
            return corpus
        corpus.documents = {key: Document.from_counts(key, counts) for key, counts in tfpd.items()}
        corpus.df = {t: int(m) for t, m in df.items()}
        return corpus

    def to_dict(self) -> dict:
        return {
            "tfpd": {key: dict(d.counts) for key, d in self.documents.items()},
            "df": dict(self.df),
        }


@dataclass(frozen=True)
class SearchResult:
    path: str                 # document key
    score: float

# docsearch/DB/memory_store.py
from __future__ import annotations
from typing import Iterator, List, Mapping, Optional
from .api import IndexStore
from ..models import Corpus, Document, SearchResult
from ..search import search_query

class MemoryStore(IndexStore):
    """In-memory backend: a Corpus queried directly (tests, JSON snapshots, ephemeral runs)."""
    def __init__(self, corpus: Optional[Corpus]=None) -> None:
        self.corpus: Corpus = corpus if corpus is not None else Corpus()

    def add_document(self, key: str, characters: str) -> Document:
        return self.corpus.add_document(key, characters)

    def search_query(self, query: str, *, top_k: Optional[int]=None) -> List[SearchResult]:
        return search_query(self.corpus, query, top_k=top_k)

    def document_count(self) -> int:
        return self.corpus.document_count()

    def clear(self) -> None:
        self.corpus = Corpus()

    def iter_documents(self) -> Iterator[Document]:
        return iter(self.corpus)

    def document_frequencies(self) -> Mapping[str, int]:
        return self.corpus.df

    def close(self) -> None:
        self.corpus = Corpus()

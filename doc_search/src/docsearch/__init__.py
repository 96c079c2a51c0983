"""
Document Search Engine Module

This module builds a term index over a folder of text-bearing documents
(plain text, XML/XHTML) and answers TF-IDF ranked queries against it.

The module is designed with a clean separation of concerns:
- Tokenization (lexer) and the frequency model (models.Corpus)
- Scoring functions and the query engine
- Storage backends (in-memory, SQLite) and JSON snapshots
- Folder walking and content extraction

Main entry points:
    Corpus.add_document(key, text): index one document in memory
    search_query(corpus, query): rank documents for a query
    Engine: build/load/search/save on top of a storage backend

Example Usage:
    from docsearch import Corpus, search_query

    corpus = Corpus()
    corpus.add_document("a.txt", "the cat sat")
    corpus.add_document("b.txt", "a dog ran")

    for result in search_query(corpus, "cat"):
        print(f"{result.score:.4f}: {result.path}")
"""

# src/docsearch/__init__.py
from .lexer import Lexer, tokenize
from .models import Corpus, Document, SearchResult
from .scoring import term_frequency, inverse_document_frequency
from .search import search_query
from .engine import Engine  # re-export

__version__ = "1.0.0"
__all__ = [
    "Lexer", "tokenize",
    "Corpus", "Document", "SearchResult",
    "term_frequency", "inverse_document_frequency",
    "search_query", "Engine",
]

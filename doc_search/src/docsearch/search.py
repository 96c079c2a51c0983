from __future__ import annotations
from typing import Iterable, List, Optional, Set, Tuple

from .lexer import Lexer
from .models import Corpus, SearchResult
from .scoring import term_frequency, inverse_document_frequency


def query_terms(query: str) -> Set[str]:
    """
    Distinct terms of a query. Repeating a word in the query does not weigh
    it more: only term presence drives scoring.
    """
    return set(Lexer(query))


def rank(scored: Iterable[Tuple[str, float]], top_k: Optional[int] = None) -> List[SearchResult]:
    """
    Keep strictly positive scores and order them best first.
    Equal scores are ordered by key so results are reproducible.
    """
    kept = [(path, score) for path, score in scored if score > 0.0]
    kept.sort(key=lambda kv: (-kv[1], kv[0]))
    if top_k is not None:
        kept = kept[:max(0, int(top_k))]
    return [SearchResult(path=path, score=score) for path, score in kept]


def search_query(corpus: Corpus, query: str, *, top_k: Optional[int] = None) -> List[SearchResult]:
    """
    Rank every document of `corpus` against `query` by summed TF-IDF:
        score(d) = sum over distinct query terms t of tf(t, d) * idf(t)
    Documents scoring 0 (no shared term) are left out.
    """
    terms = query_terms(query)
    if not terms:
        return []

    N = corpus.document_count()
    idf = {t: inverse_document_frequency(t, N, corpus.df) for t in terms}

    def _score(doc) -> float:
        return sum(term_frequency(t, doc.n, doc.counts) * idf[t] for t in terms)

    return rank(((doc.key, _score(doc)) for doc in corpus), top_k)

from __future__ import annotations
import math
from typing import Mapping

from .models import Document


def term_frequency(t: str, n: int, counts: Mapping[str, int]) -> float:
    """
    Relative frequency of `t` within one document: counts[t] / n.
    An empty document (n == 0) has no terms, so the result is 0.0.
    """
    if n == 0:
        return 0.0
    return counts.get(t, 0) / n


def inverse_document_frequency(t: str, N: int, df: Mapping[str, int]) -> float:
    """
    ln(N / m), where m is the number of documents containing `t`.

    A term that was never indexed counts as appearing in exactly one document
    (m defaults to 1, not 0): unseen terms are treated as maximally rare and
    no division by zero can occur. An empty corpus (N == 0) yields 0.0.
    """
    if N <= 0:
        return 0.0
    m = df.get(t, 1) or 1
    return math.log(N / m)


def tf_idf(t: str, doc: Document, N: int, df: Mapping[str, int]) -> float:
    return term_frequency(t, doc.n, doc.counts) * inverse_document_frequency(t, N, df)

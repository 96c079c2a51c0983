import math
from collections import Counter

import pytest
from docsearch.lexer import tokenize
from docsearch.models import Document
from docsearch.scoring import term_frequency, inverse_document_frequency, tf_idf


def test_term_frequency_is_relative_count():
    counts = {"A": 2, "B": 1, "C": 1}
    assert term_frequency("A", 4, counts) == pytest.approx(0.5)
    assert term_frequency("Z", 4, counts) == 0.0


def test_term_frequency_of_empty_document_is_zero():
    result = term_frequency("A", 0, {})
    assert result == 0.0
    assert not math.isnan(result) and not math.isinf(result)


def test_term_frequencies_weighted_by_n_sum_to_occurrences():
    counts = Counter(tokenize("a b a c, d d d."))
    n = sum(counts.values())
    total = sum(term_frequency(t, n, counts) * n for t in counts)
    assert total == pytest.approx(sum(counts.values()))


def test_idf_of_known_term():
    assert inverse_document_frequency("A", 4, {"A": 2}) == pytest.approx(math.log(2))
    assert inverse_document_frequency("A", 4, {"A": 4}) == 0.0


def test_idf_of_unseen_term_defaults_to_one_document():
    assert inverse_document_frequency("ZZZ", 5, {}) == pytest.approx(math.log(5))
    assert inverse_document_frequency("ZZZ", 2, {"A": 1}) > 0


def test_idf_of_empty_corpus_is_zero():
    assert inverse_document_frequency("A", 0, {}) == 0.0


def test_tf_idf_is_the_product():
    doc = Document.from_counts("d", {"A": 1, "B": 3})
    expected = 0.25 * math.log(3 / 1)
    assert tf_idf("A", doc, 3, {"A": 1, "B": 2}) == pytest.approx(expected)

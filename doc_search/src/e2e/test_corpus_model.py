from docsearch.models import Corpus, Document


def _df_invariant_holds(corpus: Corpus) -> bool:
    expected = {}
    for doc in corpus:
        for t, c in doc.counts.items():
            if c > 0:
                expected[t] = expected.get(t, 0) + 1
    return expected == corpus.df


def test_add_document_counts_terms_and_n():
    corpus = Corpus()
    doc = corpus.add_document("doc1", "APPLE banana apple")
    assert doc.counts == {"APPLE": 2, "BANANA": 1}
    assert doc.n == 3 == sum(doc.counts.values())
    assert corpus.document_count() == 1
    assert "doc1" in corpus and corpus.get("doc1") is doc


def test_document_frequency_counts_documents_not_occurrences():
    corpus = Corpus()
    corpus.add_document("a", "x y")
    assert corpus.document_frequency("X") == 1
    corpus.add_document("b", "x x x x")
    assert corpus.document_frequency("X") == 2
    assert corpus.document_frequency("Y") == 1
    assert _df_invariant_holds(corpus)


def test_empty_document_is_indexed():
    corpus = Corpus()
    doc = corpus.add_document("empty", "")
    assert doc.n == 0 and doc.counts == {}
    assert corpus.document_count() == 1
    assert corpus.df == {}


def test_reindexing_a_key_retracts_previous_counts():
    corpus = Corpus()
    corpus.add_document("a", "x y")
    corpus.add_document("b", "y")
    corpus.add_document("a", "y z")
    assert corpus.document_count() == 2
    assert corpus.df == {"Y": 2, "Z": 1}
    assert corpus.get("a").counts == {"Y": 1, "Z": 1}
    assert _df_invariant_holds(corpus)


def test_from_counts_recomputes_df_when_missing():
    corpus = Corpus.from_counts({"a": {"X": 2}, "b": {"X": 1, "Y": 1}})
    assert corpus.df == {"X": 2, "Y": 1}
    assert corpus.get("a") == Document(key="a", n=2, counts={"X": 2})


def test_to_dict_shape():
    corpus = Corpus()
    corpus.add_document("a", "x")
    assert corpus.to_dict() == {"tfpd": {"a": {"X": 1}}, "df": {"X": 1}}

from pathlib import Path

import pytest
from docsearch.DB.api import make_store
from docsearch.DB.memory_store import MemoryStore
from docsearch.DB.sqlite_store import SQLiteStore
from docsearch.errors import UnsupportedStoreError
from docsearch.models import Corpus

DOCS = {
    "A": "the cat sat",
    "B": "the cat sat on the mat",
    "C": "a dog ran",
    "D": "",
    "E": "Cat, cat and DOG: 3 cats",
}


def _fill(store):
    for key, text in DOCS.items():
        store.add_document(key, text)
    return store


@pytest.fixture
def sqlite_store(tmp_path: Path):
    store = SQLiteStore(str(tmp_path / "db" / "index.sqlite"))
    yield store
    store.close()


@pytest.mark.parametrize("query", ["cat", "the mat", "dog cat", "3", "nothing here", ""])
def test_sqlite_ranking_matches_memory(sqlite_store, query):
    mem = _fill(MemoryStore())
    _fill(sqlite_store)
    expected = mem.search_query(query)
    got = sqlite_store.search_query(query)
    assert [r.path for r in got] == [r.path for r in expected]
    assert [r.score for r in got] == pytest.approx([r.score for r in expected])


def test_sqlite_counts_and_frequencies(sqlite_store):
    _fill(sqlite_store)
    assert sqlite_store.document_count() == 5
    df = sqlite_store.document_frequencies()
    assert df["CAT"] == 3
    assert df["DOG"] == 2
    docs = {d.key: d for d in sqlite_store.iter_documents()}
    assert docs["E"].counts == {"CAT": 2, ",": 1, "AND": 1, "DOG": 1, ":": 1, "3": 1, "CATS": 1}
    assert docs["E"].n == 8
    assert docs["D"].n == 0 and docs["D"].counts == {}


def test_sqlite_reindex_retracts_previous_counts(sqlite_store):
    sqlite_store.add_document("a", "x y")
    sqlite_store.add_document("b", "y")
    sqlite_store.add_document("a", "y z")
    assert sqlite_store.document_count() == 2
    assert sqlite_store.document_frequencies() == {"Y": 2, "Z": 1}


def test_sqlite_index_survives_reopen(tmp_path: Path):
    path = str(tmp_path / "index.sqlite")
    first = _fill(SQLiteStore(path))
    before = first.search_query("cat")
    first.close()

    second = SQLiteStore(path)
    try:
        assert second.document_count() == len(DOCS)
        assert second.search_query("cat") == before
    finally:
        second.close()


def test_make_store_seeds_sqlite_from_corpus(tmp_path: Path):
    corpus = Corpus()
    for key, text in DOCS.items():
        corpus.add_document(key, text)
    store = make_store(f"sqlite:///{tmp_path / 'seeded.sqlite'}", corpus=corpus)
    try:
        assert store.document_count() == len(DOCS)
        assert dict(store.document_frequencies()) == corpus.df
        assert {d.key: d for d in store.iter_documents()} == corpus.documents
    finally:
        store.close()


def test_make_store_memory_and_unknown_dsn():
    corpus = Corpus()
    corpus.add_document("a", "x")
    store = make_store("memory://", corpus=corpus)
    assert isinstance(store, MemoryStore)
    assert store.document_count() == 1
    with pytest.raises(UnsupportedStoreError):
        make_store("postgres://nowhere")
    with pytest.raises(ValueError):
        make_store("bogus")


def test_sqlite_clear_and_replace_with(sqlite_store):
    _fill(sqlite_store)
    corpus = Corpus()
    corpus.add_document("new", "fresh words")
    assert sqlite_store.replace_with(corpus) == 1
    assert [d.key for d in sqlite_store.iter_documents()] == ["new"]
    assert sqlite_store.document_frequencies() == {"FRESH": 1, "WORDS": 1}
    assert sqlite_store.search_query("cat") == []

    sqlite_store.clear()
    assert sqlite_store.document_count() == 0
    assert sqlite_store.document_frequencies() == {}


def test_make_store_corpus_replaces_existing_sqlite_rows(tmp_path: Path):
    dsn = f"sqlite:///{tmp_path / 'old.sqlite'}"
    _fill(make_store(dsn)).close()

    corpus = Corpus()
    corpus.add_document("new", "fresh")
    store = make_store(dsn, corpus=corpus)
    try:
        assert store.document_count() == 1
        assert [r.path for r in store.search_query("fresh cat")] == ["new"]
    finally:
        store.close()


def test_memory_store_clear():
    store = _fill(MemoryStore())
    store.clear()
    assert store.document_count() == 0
    assert store.search_query("cat") == []

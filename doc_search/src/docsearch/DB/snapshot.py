from __future__ import annotations
import json
import os
from typing import Iterable, Mapping

from ..errors import IndexFileError
from ..models import Corpus, Document

# File format (JSON object):
#   "tfpd" : {document key: {term: count}}   per-document term counts
#   "df"   : {term: document frequency}
# A document's total term count n is the sum of its counts and is not stored.


def save_snapshot(documents: Iterable[Document], df: Mapping[str, int], path: str) -> None:
    """Write atomically: dump to <path>.tmp, then replace."""
    payload = {
        "tfpd": {d.key: dict(d.counts) for d in documents},
        "df": dict(df),
    }
    tmp = f"{path}.tmp"
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False)
        os.replace(tmp, path)
    except OSError as e:
        raise IndexFileError(path, str(e)) from e


def save_corpus(corpus: Corpus, path: str) -> None:
    save_snapshot(corpus, corpus.df, path)


def load_corpus(path: str) -> Corpus:
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except OSError as e:
        raise IndexFileError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise IndexFileError(path, f"invalid JSON at line {e.lineno} column {e.colno}") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("tfpd"), dict):
        raise IndexFileError(path, "missing 'tfpd' mapping")
    df = payload.get("df")
    if df is not None and not isinstance(df, dict):
        raise IndexFileError(path, "'df' must be a mapping")
    return Corpus.from_counts(payload["tfpd"], df)

from __future__ import annotations
import logging
import os
from typing import Callable, Iterable, Iterator, Optional, Tuple

from . import config as CFG
from .errors import ExtractionError
from .extract import extract

log = logging.getLogger(__name__)

def _iter_files(roots: Iterable[str], exts: Optional[set[str]] = None) -> Iterator[str]:
    """Yield paths of indexable files recursively under each root (a root may itself be a file)."""
    exts = exts if exts is not None else CFG.INCLUDE_EXTS
    for root in roots:
        if os.path.isfile(root):
            yield root
            continue
        if not os.path.isdir(root):
            raise ExtractionError(root, "could not open directory for indexing")

        def _raise(err: OSError) -> None:
            raise ExtractionError(err.filename or root, f"could not read directory: {err.strerror}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            dirnames[:] = sorted(d for d in dirnames if d not in CFG.EXCLUDE_DIRS)
            for fn in sorted(filenames):
                if os.path.splitext(fn)[1].lower() in exts:
                    yield os.path.join(dirpath, fn).replace("\\", "/")

def iter_documents(roots: Iterable[str],
                   reader: Callable[[str], str] = extract,
                   exts: Optional[set[str]] = None) -> Iterator[Tuple[str, str]]:
    """
    Yield (path, content) for every indexable file under `roots`.
    A file that cannot be extracted is logged and skipped; the walk goes on.
    """
    file_count = skipped = 0
    for path in _iter_files(roots, exts):
        try:
            content = reader(path)
        except ExtractionError as e:
            skipped += 1
            log.warning("skipping %s", e)
            continue
        file_count += 1
        if CFG.verbose() and file_count % CFG.PROGRESS_EVERY_FILES == 0:
            print(f"[indexed] files={file_count:,}")
        yield path, content

    log.info("Scanned %d files (%d skipped)", file_count, skipped)
    if CFG.verbose():
        print(f"[done] files={file_count:,} skipped={skipped:,}")

from __future__ import annotations
import os
import xml.etree.ElementTree as ET

from .config import XML_EXTS
from .errors import ExtractionError


def extract_xml(path: str) -> str:
    """
    Flatten an XML document: every non-blank text node, in document order,
    followed by one space. Markup and attributes are dropped.
    """
    try:
        root = ET.parse(path).getroot()
    except OSError as e:
        raise ExtractionError(path, f"could not open file: {e}") from e
    except ET.ParseError as e:
        row, col = e.position
        raise ExtractionError(path, f"{row}:{col}: {e}") from e
    return "".join(chunk + " " for chunk in root.itertext() if chunk.strip())


def extract_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise ExtractionError(path, f"could not open file: {e}") from e


def extract(path: str) -> str:
    """Return the flat character content of `path`, picking a reader by extension."""
    ext = os.path.splitext(path)[1].lower()
    if ext in XML_EXTS:
        return extract_xml(path)
    return extract_text(path)

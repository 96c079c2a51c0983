from __future__ import annotations
import string
from typing import Callable, Iterator

# ASCII-only case fold: non-ASCII letters keep their case
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class Lexer:
    """
    Single-pass iterator over the terms of a character sequence.
    Rules:
      * leading whitespace is skipped
      * a run of decimal digits is one term, unchanged
      * a letter starts a run of letters/digits, ASCII-upper-cased
      * any other character is a one-character term
    A digit run followed by letters yields two terms ("42abc" -> "42", "ABC").

    "Letter" means str.isalpha (Unicode categories L*), which is narrower than
    the Unicode Alphabetic property: combining vowel signs (Mn/Mc, e.g.
    Devanagari U+093F) are not letters here and come out as one-character
    terms, so "कि" -> "क", "ि".
    """
    def __init__(self, content: str) -> None:
        self._content = content
        self._pos = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    # ---- internals ----
    def _trim_left(self) -> None:
        content, pos = self._content, self._pos
        while pos < len(content) and content[pos].isspace():
            pos += 1
        self._pos = pos

    def _chop(self, n: int) -> str:
        token = self._content[self._pos:self._pos + n]
        self._pos += n
        return token

    def _chop_while(self, predicate: Callable[[str], bool]) -> str:
        content, start = self._content, self._pos
        end = start
        while end < len(content) and predicate(content[end]):
            end += 1
        return self._chop(end - start)

    def next_token(self) -> str | None:
        self._trim_left()
        if self._pos >= len(self._content):
            return None

        head = self._content[self._pos]
        if head.isdecimal():
            return self._chop_while(str.isdecimal)
        if head.isalpha():
            return self._chop_while(str.isalnum).translate(_ASCII_UPPER)
        return self._chop(1)


def tokenize(content: str) -> Lexer:
    """Convenience: a fresh Lexer over `content`."""
    return Lexer(content)

r"""
Quoted-string tokenizer.

What this module provides
- Cursor: a forward-only view over a piece of text. Scanning never copies the
  underlying buffer; only the extracted strings are materialized.
- extract(cursor): pull one escape-aware, double-quoted string out of the cursor.

String grammar
- optional leading whitespace, then '"', then one or more characters, then '"'.
- a quote preceded by an odd run of backslashes is a literal quote and does not
  end the string; every '\"' pair collapses to '"' in the result.
- a backslash that is not directly before a quote is kept as-is.

Examples
    >>> cursor = Cursor('"S\\"nail" = "x"')
    >>> extract(cursor)
    'S"nail'
    >>> cursor.remaining
    ' = "x"'
"""
from .faults import (
    StringWithoutOpeningQuoteError,
    InvalidStringError,
    EmptyStringError,
    StringWithoutClosingQuoteError,
)
from .utils import Unset


class Cursor:
    """
    forward-only view over unparsed text.

    invariants
    - the offset only grows; every operation advances it or leaves it untouched.
    - line is the 1-based physical line of the current position; it is kept up to
      date as newlines are passed so that callers can report where a failure happened.
    """
    __slots__ = ("_text", "_offset", "_line")

    def __init__(self, text, /):
        if not isinstance(text, str):
            raise TypeError("Cursor() argument must be a string")
        self._text = text
        self._offset = 0
        self._line = 1

    @property
    def offset(self):
        return self._offset

    @property
    def line(self):
        return self._line

    @property
    def remaining(self):
        """the unparsed rest of the text (a copy, meant for diagnostics and tests)."""
        return self._text[self._offset:]

    def __bool__(self):
        return self._offset < len(self._text)

    def __len__(self):
        return len(self._text) - self._offset

    def __repr__(self):
        return "Cursor(%r)" % self.remaining

    def peek(self, ahead=0):
        """return the character `ahead` positions past the current one, or Unset past the end."""
        try:
            return self._text[self._offset + ahead]
        except IndexError:
            return Unset

    def pop(self):
        """consume and return the current character, or Unset when the text is exhausted."""
        if (char := self.peek()) is not Unset:
            self.advance(1)
        return char

    def advance(self, count):
        """move forward by `count` characters (clamped to the end of the text)."""
        stop = min(self._offset + count, len(self._text))
        self._line += self._text.count("\n", self._offset, stop)
        self._offset = stop

    def skip_whitespace(self):
        while (char := self.peek()) is not Unset and char.isspace():
            self.advance(1)

    def span(self, start, stop):
        """return the text between two absolute offsets."""
        return self._text[start:stop]


def extract(cursor, /):
    """
    extract one quoted string from the cursor.

    behavior
    - skips leading whitespace, then requires an opening '"'.
    - scans forward counting the backslashes directly before each character; a '"'
      ends the string only when that count is even.
    - collapses every '\\"' pair in the scanned span to '"'.
    - on success the cursor is left right after the closing quote.

    errors
    - StringWithoutOpeningQuoteError: the next non-blank character is not '"'.
    - InvalidStringError: the text ends right after the opening quote.
    - StringWithoutClosingQuoteError: the text ends before an unescaped '"'.
    - EmptyStringError: the string has no content ('""').
    """
    cursor.skip_whitespace()
    if cursor.pop() != '"':
        raise StringWithoutOpeningQuoteError()
    if not cursor:
        raise InvalidStringError()

    start = cursor.offset
    backslashes = 0
    while (char := cursor.peek()) is not Unset:
        if char == '"' and backslashes % 2 == 0:
            break
        backslashes = backslashes + 1 if char == "\\" else 0
        cursor.advance(1)
    else:
        raise StringWithoutClosingQuoteError()

    content = cursor.span(start, cursor.offset).replace('\\"', '"')
    cursor.advance(1)  # closing quote

    if not content:
        raise EmptyStringError()
    return content


__all__ = (
    "Cursor",
    "extract",
)

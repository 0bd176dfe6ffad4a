"""Text normalization and query tokenization.

Every comparison in the engine runs on normalized text: lowercased, with
punctuation replaced by spaces and whitespace collapsed. The tokenizer is the
same normalization followed by a split on the single remaining delimiter.
"""

from __future__ import annotations

import re
import unicodedata


_WHITESPACE = re.compile(r"\s+", re.UNICODE)
# Letters, combining marks and numbers; marks stay attached to their base letter
_WORD_CATEGORIES = frozenset("LMN")


def _is_word_char(char: str) -> bool:
    return char.isspace() or unicodedata.category(char)[0] in _WORD_CATEGORIES


def normalize(text: str) -> str:
    """Canonicalize ``text`` for comparison.

    Examples:
        >>> normalize("  Elite Construction Co. ")
        'elite construction co'
        >>> normalize("O'Brien & Sons")
        'o brien sons'
        >>> normalize("...")
        ''
    """
    if not text:
        return ""
    lowered = text.lower()
    spaced = "".join(char if _is_word_char(char) else " " for char in lowered)
    return _WHITESPACE.sub(" ", spaced).strip()


def tokenize(query: str) -> list[str]:
    """Split a raw query into normalized, non-empty terms in query order."""

    return [term for term in normalize(query).split(" ") if term]

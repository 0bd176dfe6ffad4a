"""Edit distance and similarity ratio for typo-tolerant matching.

The similarity ratio is the share of the longer string that survives the
edit distance: ``(len(longer) - distance) / len(longer)``. It is 1.0 for
identical strings and 0.0 when every character has to change.
"""

from __future__ import annotations


def levenshtein_distance(s1: str, s2: str) -> int:
    """Return the minimum number of single-character edits turning s1 into s2.

    Insertions, deletions and substitutions each cost 1. Runs in O(m*n) time
    and keeps a single row of the table, sized by the shorter string.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("jon smith", "john smith")
        1
        >>> levenshtein_distance("", "abc")
        3
    """
    if len(s1) < len(s2):
        s1, s2 = s2, s1
    if not s2:
        return len(s1)

    row = list(range(len(s2) + 1))
    for row_index, char1 in enumerate(s1, start=1):
        diagonal, row[0] = row[0], row_index
        for col, char2 in enumerate(s2, start=1):
            above = row[col]
            row[col] = min(
                above + 1,  # deletion
                row[col - 1] + 1,  # insertion
                diagonal + (char1 != char2),  # substitution
            )
            diagonal = above

    return row[-1]


def similarity(a: str, b: str) -> float:
    """Return the edit-distance similarity of ``a`` and ``b`` in ``[0, 1]``.

    Two empty strings are identical (1.0). On equal lengths ``b`` is taken as
    the longer string.

    Examples:
        >>> similarity("abc", "abc")
        1.0
        >>> similarity("abcd", "abce")
        0.75
    """
    if len(a) > len(b):
        longer, shorter = a, b
    else:
        longer, shorter = b, a

    if not longer:
        return 1.0

    distance = levenshtein_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)

"""Levenshtein edit distance.

Pure, deterministic functions counting the single-character insertions,
deletions and substitutions needed to turn one string into another.
Strings are compared as raw character sequences: no case folding, no
Unicode normalization, no grapheme handling.

Two implementations of the same metric are provided. They always agree
and differ only in memory use:

- ``levenshtein_matrix``: reference form filling the full (m+1) x (n+1)
  table, O(mn) memory. Only sensible for short fields.
- ``levenshtein``: two rotating rows, O(max(m, n)) memory. Used by the
  indexes.
"""

from fuzzydex.errors import ValidationError

__all__ = ["levenshtein", "levenshtein_matrix"]


def levenshtein_matrix(source: str, target: str) -> int:
    """Compute edit distance with a full dynamic-programming table.

    Parameters
    ----------
    source : str
        First string.
    target : str
        Second string.

    Returns
    -------
    int
        Levenshtein distance.
    """
    _check_operands(source, target)

    m = len(source)
    n = len(target)

    matrix = [[0] * (n + 1) for _ in range(m + 1)]

    # Border cells: cost of reaching an empty prefix.
    for i in range(m + 1):
        matrix[i][0] = i
    for j in range(n + 1):
        matrix[0][j] = j

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if source[i - 1] == target[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j],
                    matrix[i][j - 1],
                    matrix[i - 1][j - 1],
                )

    return matrix[m][n]


def levenshtein(source: str, target: str) -> int:
    """Compute edit distance keeping only two rows of the table.

    Parameters
    ----------
    source : str
        First string.
    target : str
        Second string.

    Returns
    -------
    int
        Levenshtein distance, identical to ``levenshtein_matrix``.

    Examples
    --------
        >>> levenshtein("kitten", "sitting")
        3
    """
    _check_operands(source, target)

    # Rows run over the longer string so memory is O(max(m, n)).
    if len(target) < len(source):
        source, target = target, source

    n = len(target)
    previous = list(range(n + 1))
    current = [0] * (n + 1)

    for i, source_char in enumerate(source, start=1):
        current[0] = i
        for j in range(1, n + 1):
            if source_char == target[j - 1]:
                current[j] = previous[j - 1]
            else:
                current[j] = 1 + min(previous[j], current[j - 1], previous[j - 1])
        previous, current = current, previous

    return previous[n]


def _check_operands(source: str, target: str) -> None:
    if source is None or target is None:
        raise ValidationError("Cannot compute edit distance against None")

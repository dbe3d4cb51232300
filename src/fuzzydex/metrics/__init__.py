"""String metrics used to score fuzzy matches."""

from fuzzydex.metrics.levenshtein import levenshtein, levenshtein_matrix

__all__ = ["levenshtein", "levenshtein_matrix"]

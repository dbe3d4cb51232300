"""Query shapes: single-dimension matches and compound queries."""

from fuzzydex.query.models import Match, NAryQuery, Query, as_nary, expect_match

__all__ = ["Match", "NAryQuery", "Query", "as_nary", "expect_match"]

"""Multidimensional fuzzy index.

Composes named, weighted single-dimension indexes. A compound query is
resolved one dimension at a time and the per-dimension RankedSets are
folded together pairwise with RankedSet's weighted joins:

- exact and nearest resolution use the inner join, so only facts matched
  in every named dimension survive;
- ranked resolution uses the left outer join, so facts missing from some
  dimensions survive with a penalised score when it passes the caller's
  threshold.

Each join weighs the accumulated result with the weight of the
previously folded dimension only, not a normalised weight over all prior
dimensions. With three or more dimensions this biases the combined score
toward the later dimensions.
"""

from collections.abc import Iterator
from enum import StrEnum
from typing import Any, Generic, TypeVar

from fuzzydex.audit import AuditLogger
from fuzzydex.collections import RankedSet
from fuzzydex.entity import Attribute, Entity
from fuzzydex.errors import (
    DimensionNotFoundError,
    FactStateError,
    FuzzydexError,
    StateViolationError,
    ValidationError,
)
from fuzzydex.index import Index, create_index
from fuzzydex.multidex.config import MultidexConfig
from fuzzydex.query import Match, NAryQuery, Query, as_nary

__all__ = ["MultidimensionalIndex", "ResolutionMode"]

T = TypeVar("T")

_STAGE = "multidex"


class ResolutionMode(StrEnum):
    """How each dimension is searched and how the results are joined."""

    EXACT = "exact"
    NEAREST = "nearest"
    RANKED = "ranked"


class MultidimensionalIndex(Generic[T]):
    """Fuzzy index over several named, weighted dimensions.

    Dimensions must be registered before facts reference them. Facts are
    added once with ``add_fact``; more index members (aliases) can be
    attached later with ``add_index_members_for_existing_fact``.

    Parameters
    ----------
    config : MultidexConfig | None, optional
        Fact tracking and default index settings.
    audit_logger : AuditLogger | None, optional
        Structured event logger. If None, no logging.

    Notes
    -----
    Not thread-safe. Concurrent mutation must be prevented by the caller.
    """

    def __init__(
        self,
        config: MultidexConfig | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self.config = config if config is not None else MultidexConfig()
        self.audit_logger = audit_logger
        self._dimensions: dict[str, Index[T]] = {}
        # Insertion-ordered master fact set; None when tracking is disabled.
        self._facts: dict[T, None] | None = {} if self.config.track_facts else None

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    def add_index_dimension(self, name: str, index: Index[T] | None = None) -> Index[T]:
        """Register (or replace) the dimension called ``name``.

        Parameters
        ----------
        name : str
            Dimension name.
        index : Index | None, optional
            Index backing the dimension. If None, one is created from
            ``config.index_type`` and ``config.default_tolerance``.

        Returns
        -------
        Index
            The registered index.
        """
        if name is None:
            raise ValidationError("dimension name must not be None")
        if index is None:
            index = create_index(
                self.config.index_type,
                tolerance=self.config.default_tolerance,
            )
        elif not isinstance(index, Index):
            raise ValidationError(f"Expected an Index, got {type(index).__name__}")

        self._dimensions[name] = index

        if self.audit_logger is not None:
            self.audit_logger.dimension_added(name, type(index).__name__, index.weight)

        return index

    def get_index(self, name: str) -> Index[T]:
        """Return the index backing dimension ``name``.

        Raises
        ------
        DimensionNotFoundError
            If no such dimension exists.
        """
        if name is None:
            raise ValidationError("dimension name must not be None")
        index = self._dimensions.get(name)
        if index is None:
            raise DimensionNotFoundError(name)
        return index

    @property
    def dimensions(self) -> list[str]:
        """Return registered dimension names in registration order."""
        return list(self._dimensions)

    # ------------------------------------------------------------------
    # Facts
    # ------------------------------------------------------------------

    def disable_fact_tracking(self) -> None:
        """Discard the master fact set.

        Saves memory and time at the cost of the duplicate-fact and
        existing-fact checks, which are skipped from now on. Only this
        index is affected; ``config`` is left as given.
        """
        self._facts = None

    @property
    def tracks_facts(self) -> bool:
        """Return whether the master fact set is kept."""
        return self._facts is not None

    def facts(self) -> Iterator[T]:
        """Iterate over known facts in registration order.

        Raises
        ------
        StateViolationError
            If fact tracking is disabled.
        """
        if self._facts is None:
            raise StateViolationError("Fact tracking is disabled; no facts are recorded")
        return iter(list(self._facts))

    def __contains__(self, fact: object) -> bool:
        return self._facts is not None and fact in self._facts

    def add_fact(self, fact: T, *attributes: Attribute[str]) -> None:
        """Register ``fact`` and index it under each attribute's dimension.

        Parameters
        ----------
        fact : T
            Fact to register. Must be hashable.
        *attributes : Attribute[str]
            (dimension name, key) pairs to index the fact under.

        Raises
        ------
        FactStateError
            If tracking is enabled and the fact already exists.
        DimensionNotFoundError
            If an attribute names an unknown dimension. Nothing is
            registered or indexed in that case.
        """
        _check_fact(fact)
        targets = self._resolve_attributes(attributes)

        self._register_fact(fact)
        self._index_members(fact, targets)

        if self.audit_logger is not None:
            self.audit_logger.fact_added(fact, [a.name for a in attributes], existing=False)

    def add_index_members_for_existing_fact(self, fact: T, *attributes: Attribute[str]) -> None:
        """Index an already registered fact under more keys.

        Raises
        ------
        FactStateError
            If tracking is enabled and the fact is not registered.
        DimensionNotFoundError
            If an attribute names an unknown dimension.
        """
        _check_fact(fact)
        targets = self._resolve_attributes(attributes)

        if self._facts is not None and fact not in self._facts:
            raise FactStateError(f"Fact {fact!r} does not exist", fact)

        self._index_members(fact, targets)

        if self.audit_logger is not None:
            self.audit_logger.fact_added(fact, [a.name for a in attributes], existing=True)

    def add_entity(self, entity: Entity) -> None:
        """Register ``entity.identifier`` as a fact.

        Primary attributes and aliases are indexed together. Every
        dimension they name is resolved first, so an unknown dimension
        leaves the fact unregistered and unindexed.

        Raises
        ------
        FactStateError
            If tracking is enabled and the fact already exists.
        DimensionNotFoundError
            If an attribute or alias names an unknown dimension.
        """
        if entity is None:
            raise ValidationError("entity must not be None")

        fact = entity.identifier
        attributes = tuple(entity.attributes())
        aliases = tuple(entity.aliases())
        targets = self._resolve_attributes(attributes)
        alias_targets = self._resolve_attributes(aliases)

        self._register_fact(fact)
        self._index_members(fact, targets + alias_targets)

        if self.audit_logger is not None:
            self.audit_logger.fact_added(fact, [a.name for a in attributes], existing=False)
            if aliases:
                self.audit_logger.fact_added(fact, [a.name for a in aliases], existing=True)

    def _register_fact(self, fact: T) -> None:
        if self._facts is not None:
            if fact in self._facts:
                raise FactStateError(f"Fact {fact!r} already exists", fact)
            self._facts[fact] = None

    def _resolve_attributes(
        self, attributes: tuple[Attribute[str], ...]
    ) -> list[tuple[Index[T], str]]:
        targets: list[tuple[Index[T], str]] = []
        for attribute in attributes:
            if attribute is None:
                raise ValidationError("attribute must not be None")
            index = self._dimensions.get(attribute.name)
            if index is None:
                raise DimensionNotFoundError(attribute.name)
            targets.append((index, attribute.value))
        return targets

    @staticmethod
    def _index_members(fact: T, targets: list[tuple[Index[T], str]]) -> None:
        for index, key in targets:
            index.add_entry(key, fact)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_exact_matches(self, query: Query) -> RankedSet[T]:
        """Return facts matching every sub-query exactly.

        Scores are the weighted averages of the per-dimension default ranks.

        Raises
        ------
        DimensionNotFoundError
            If the query names an unknown dimension.
        QueryShapeError
            If query is neither a Match nor an NAryQuery.
        """
        return self._resolve(query, ResolutionMode.EXACT)

    def get_nearest_matches(self, query: Query) -> RankedSet[T]:
        """Return facts that are the nearest match in every named dimension.

        Returns the INNER JOIN of the per-dimension nearest matches,
        scored by the weighted average of their ranks.
        """
        return self._resolve(query, ResolutionMode.NEAREST)

    def get_ranked_matches(self, threshold: float, query: Query) -> RankedSet[T]:
        """Return facts matched in any named dimension, ranked by distance.

        Returns the OUTER JOIN of the per-dimension ranked matches. A fact
        missing from a dimension takes the missing-score sentinel for it,
        and only facts whose combined score passes ``threshold`` are
        kept. With the most permissive threshold at least
        ``|L| + |R| - |L & R|`` facts come back per join.

        Parameters
        ----------
        threshold : float
            Combined-score cut-off applied at each join.
        query : Query
            Match or NAryQuery.
        """
        if threshold is None or not threshold >= 0:
            raise ValidationError(f"threshold must be >= 0, got {threshold!r}")
        return self._resolve(query, ResolutionMode.RANKED, threshold)

    def _resolve(
        self,
        query: Query,
        mode: ResolutionMode,
        threshold: float = 0.0,
    ) -> RankedSet[T]:
        try:
            compound = as_nary(query)
            results = self._fold(compound, mode, threshold)
        except FuzzydexError as e:
            if self.audit_logger is not None:
                self.audit_logger.error(type(e).__name__, str(e), stage=_STAGE)
            raise

        if self.audit_logger is not None:
            self.audit_logger.query_resolved(
                mode.value,
                compound.dimensions(),
                len(results),
                threshold=threshold if mode == ResolutionMode.RANKED else None,
            )

        return results

    def _fold(
        self,
        compound: NAryQuery,
        mode: ResolutionMode,
        threshold: float,
    ) -> RankedSet[T]:
        results: RankedSet[T] | None = None
        weight_of_last_dimension = 1.0

        for subquery in compound:
            dimension = self.get_index(subquery.dimension)
            partial = self._search(dimension, subquery, mode, threshold)

            if results is None:
                results = partial
            elif mode == ResolutionMode.RANKED:
                results = results.weighted_left_outer_join(
                    partial, weight_of_last_dimension, dimension.weight, threshold
                )
            else:
                results = results.weighted_inside_join(
                    partial, weight_of_last_dimension, dimension.weight
                )
            weight_of_last_dimension = dimension.weight

        return results if results is not None else RankedSet()

    @staticmethod
    def _search(
        dimension: Index[T],
        subquery: Match,
        mode: ResolutionMode,
        threshold: float,
    ) -> RankedSet[T]:
        match mode:
            case ResolutionMode.EXACT:
                return dimension.match_exact(subquery)
            case ResolutionMode.NEAREST:
                return dimension.match_nearest(subquery)
            case ResolutionMode.RANKED:
                return dimension.match_ranked(threshold, subquery)


def _check_fact(fact: Any) -> None:
    if fact is None:
        raise ValidationError("fact must not be None")

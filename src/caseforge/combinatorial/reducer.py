"""Pairwise covering-array construction.

A pairwise covering array is a subset of the Cartesian product in which
every pair of values from any two parameters appears together in at
least one tuple. Most defects are triggered by the interaction of one or
two parameters, so pairwise suites catch the bulk of them with a small
fraction of the exhaustive tuple count.

The reducer builds the array in parameter order (IPO):

1. Seed with the full cross-product of parameters 0 and 1.
2. For each further parameter k:
   a. Horizontal growth: give every existing row the value of k that
      covers the most still-uncovered pairs between k and the earlier
      parameters (earliest value wins ties).
   b. Vertical growth: for each pair still uncovered, add a row fixing
      that pair and filling the other earlier positions with a value
      that covers another uncovered pair with k, or the first value of
      the domain when none does.
3. The rows, in construction order, are the result.

Coverage is tracked over domain indices, so values do not need to be
hashable and duplicate values in a domain are harmless.

Example:
    >>> reducer = CoveringArrayReducer([(False, True)] * 3)
    >>> tuples = reducer.generate()
    >>> len(tuples)
    4
    >>> reducer.coverage_stats(tuples).coverage_pct
    100.0
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from caseforge.combinatorial.expander import CartesianCursor, cartesian_size

logger = logging.getLogger(__name__)

# (earlier parameter, value index there, value index of the parameter being added)
_PendingPair = tuple[int, int, int]


@dataclass
class CoverageStats:
    """How well a tuple set covers the pairs of a domain list.

    Attributes:
        total_pairs: Number of value pairs that must be covered.
        covered_pairs: Number of those pairs present in the tuple set.
        coverage_pct: Percentage coverage (0-100).
        test_count: Number of tuples in the set.
        exhaustive_count: Size of the full Cartesian product.
    """

    total_pairs: int
    covered_pairs: int
    coverage_pct: float
    test_count: int
    exhaustive_count: int

    @property
    def complete(self) -> bool:
        return self.covered_pairs == self.total_pairs

    def __repr__(self) -> str:
        return (
            f"CoverageStats({self.covered_pairs}/{self.total_pairs} pairs covered "
            f"({self.coverage_pct:.1f}%), "
            f"{self.test_count} tests vs {self.exhaustive_count} exhaustive)"
        )


class CoveringArrayReducer:
    """Builds a pairwise covering array over a list of resolved domains.

    The construction is greedy and deterministic: the same domains
    always produce the same tuples in the same order. The result never
    has more tuples than the Cartesian product, because every row it
    adds covers a pair no earlier row covers.

    Degenerate inputs behave like the exhaustive expander: no parameters
    yield one empty tuple, a single parameter yields its whole domain,
    and an empty domain yields no tuples at all (pairs involving it can
    never be covered and are dropped, and no complete tuple can be built
    without it).

    Attributes:
        domains: The resolved domains, in parameter order.
    """

    def __init__(self, domains: Sequence[Sequence[Any]]) -> None:
        self.domains = [tuple(d) for d in domains]
        self._sizes = [len(d) for d in self.domains]

    def generate(self) -> list[tuple[Any, ...]]:
        """Build the covering array.

        Returns:
            Tuples of values, one value per parameter, in construction order.
        """
        n_params = len(self.domains)
        exhaustive = cartesian_size(self.domains)

        if n_params <= 1 or 0 in self._sizes:
            if 0 in self._sizes:
                logger.info("Empty domain present, pairwise generation yields no tuples")
            return list(CartesianCursor(self.domains))

        rows = self._build_rows()

        logger.info(
            f"Generated {len(rows)} pairwise tuples for {n_params} parameters "
            f"(vs {exhaustive} exhaustive)"
        )
        return [
            tuple(self.domains[p][idx] for p, idx in enumerate(row))
            for row in rows
        ]

    def _build_rows(self) -> list[list[int]]:
        sizes = self._sizes
        rows = [[a, b] for a in range(sizes[0]) for b in range(sizes[1])]

        for k in range(2, len(sizes)):
            uncovered: set[_PendingPair] = {
                (p, a, c)
                for p in range(k)
                for a in range(sizes[p])
                for c in range(sizes[k])
            }
            self._grow_horizontally(rows, k, uncovered)
            added = self._grow_vertically(k, uncovered)
            rows.extend(added)

            logger.debug(
                f"Parameter {k}: extended {len(rows) - len(added)} rows, "
                f"added {len(added)}"
            )

        return rows

    def _grow_horizontally(
        self,
        rows: list[list[int]],
        k: int,
        uncovered: set[_PendingPair],
    ) -> None:
        """Append a value for parameter k to every row, greedily."""
        for row in rows:
            best = 0
            best_gain = -1
            for c in range(self._sizes[k]):
                gain = sum(1 for p in range(k) if (p, row[p], c) in uncovered)
                if gain > best_gain:
                    best = c
                    best_gain = gain
            row.append(best)
            uncovered.difference_update((p, row[p], best) for p in range(k))

    def _grow_vertically(
        self,
        k: int,
        uncovered: set[_PendingPair],
    ) -> list[list[int]]:
        """Add rows for the pairs horizontal growth left uncovered."""
        added: list[list[int]] = []

        for c in range(self._sizes[k]):
            for p in range(k):
                for a in range(self._sizes[p]):
                    if (p, a, c) not in uncovered:
                        continue

                    row = [0] * (k + 1)
                    row[p] = a
                    row[k] = c
                    for q in range(k):
                        if q != p:
                            row[q] = self._best_filler(q, c, uncovered)

                    uncovered.difference_update((q, row[q], c) for q in range(k))
                    added.append(row)

        return added

    def _best_filler(self, q: int, c: int, uncovered: set[_PendingPair]) -> int:
        # Only pairs with the new parameter can still be open at this point.
        for v in range(self._sizes[q]):
            if (q, v, c) in uncovered:
                return v
        return 0

    def coverage_stats(self, tuples: Sequence[Sequence[Any]]) -> CoverageStats:
        """Measure the pairwise coverage of ``tuples`` over these domains.

        Args:
            tuples: Value tuples, e.g. the output of generate().

        Returns:
            CoverageStats for the tuple set.
        """
        n_params = len(self.domains)
        total = 0
        for i in range(n_params):
            for j in range(i + 1, n_params):
                total += self._sizes[i] * self._sizes[j]

        covered: set[tuple[int, int, int, int]] = set()
        for values in tuples:
            matches = [
                [idx for idx, candidate in enumerate(domain) if candidate == value]
                for domain, value in zip(self.domains, values)
            ]
            for i in range(n_params):
                for j in range(i + 1, n_params):
                    for a in matches[i]:
                        for b in matches[j]:
                            covered.add((i, a, j, b))

        pct = (len(covered) / total * 100) if total > 0 else 100.0

        return CoverageStats(
            total_pairs=total,
            covered_pairs=len(covered),
            coverage_pct=pct,
            test_count=len(tuples),
            exhaustive_count=cartesian_size(self.domains),
        )


def pairwise_tuples(domains: Sequence[Sequence[Any]]) -> Iterator[tuple[Any, ...]]:
    """Yield a pairwise covering array over ``domains``, in construction order."""
    return iter(CoveringArrayReducer(domains).generate())


__all__ = ["CoverageStats", "CoveringArrayReducer", "pairwise_tuples"]

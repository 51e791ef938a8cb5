"""Exhaustive expansion of resolved domains.

The expander walks the full Cartesian product of N domains as if they
were nested loops: parameter 0 is the outermost (slowest-varying) loop
and parameter N-1 the innermost (fastest-varying) one. The order is the
lexicographic order of domain-index tuples:

    (0, 0, ..., 0), (0, 0, ..., 1), ..., (d0-1, d1-1, ..., dN-1 - 1)

Two degenerate cases are policy, not errors:
    - no parameters: exactly one tuple, the empty tuple
    - any empty domain: zero tuples
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any


class CartesianCursor:
    """Iterator over the Cartesian product of a list of domains.

    Keeps an explicit stack of per-level indices instead of recursing,
    so the number of parameters is not limited by the call stack. Each
    emitted tuple is a new object; nothing yielded aliases the cursor's
    working state.

    Example:
        >>> list(CartesianCursor([(False, True), ("a", "b")]))
        [(False, 'a'), (False, 'b'), (True, 'a'), (True, 'b')]
    """

    def __init__(self, domains: Sequence[Sequence[Any]]) -> None:
        self._domains = [tuple(d) for d in domains]
        self._indices = [0] * len(self._domains)
        self._exhausted = any(len(d) == 0 for d in self._domains)
        self._started = False

    def __iter__(self) -> CartesianCursor:
        return self

    def __next__(self) -> tuple[Any, ...]:
        if self._exhausted:
            raise StopIteration
        if self._started:
            self._advance()
            if self._exhausted:
                raise StopIteration
        self._started = True
        return tuple(domain[i] for domain, i in zip(self._domains, self._indices))

    def _advance(self) -> None:
        """Step the index stack like an odometer, innermost level first."""
        level = len(self._indices) - 1
        while level >= 0:
            self._indices[level] += 1
            if self._indices[level] < len(self._domains[level]):
                return
            self._indices[level] = 0
            level -= 1
        # Rolled over the outermost level (or there were no levels at all).
        self._exhausted = True


def cartesian_tuples(domains: Sequence[Sequence[Any]]) -> Iterator[tuple[Any, ...]]:
    """Lazily yield every tuple of the Cartesian product of ``domains``."""
    return CartesianCursor(domains)


def cartesian_size(domains: Sequence[Sequence[Any]]) -> int:
    """Number of tuples the expander yields for ``domains``."""
    result = 1
    for d in domains:
        result *= len(d)
    return result


__all__ = ["CartesianCursor", "cartesian_tuples", "cartesian_size"]

"""Generation requests: from parameter slots to argument factories.

The orchestrator is the boundary the host test framework talks to. It
resolves every slot's domain up front, so a misconfigured parameter fails
before a single case is produced, then hands back a CaseSequence: a lazy,
restartable sequence of ArgumentFactory objects, one per test invocation.

Example:
    >>> from caseforge.combinatorial import ParameterSlot, IntRange
    >>> slots = [
    ...     ParameterSlot(0, "flag", bool),
    ...     ParameterSlot(1, "size", int, IntRange(start=0, count=3)),
    ... ]
    >>> cases = generate_cases(slots, GenerationMode.EXHAUSTIVE)
    >>> [factory() for factory in cases][:2]
    [[False, 0], [False, 1]]
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from caseforge.combinatorial.domains import (
    ParameterSlot,
    ResolvedDomain,
    resolve_domains,
)
from caseforge.combinatorial.expander import CartesianCursor, cartesian_size
from caseforge.combinatorial.reducer import CoveringArrayReducer
from caseforge.errors import StructuralError

logger = logging.getLogger(__name__)


class GenerationMode(str, Enum):
    """How tuples are derived from the resolved domains."""

    EXHAUSTIVE = "exhaustive"
    PAIRWISE = "pairwise"


@dataclass(frozen=True)
class ArgumentFactory:
    """Produces the argument list for one test invocation.

    Each call returns a new list, so the host may mutate what it gets
    without affecting later calls.

    Attributes:
        index: Position of this case in its sequence.
        values: The bound tuple, one value per parameter.
    """

    index: int
    values: tuple[Any, ...]

    def __call__(self) -> list[Any]:
        return list(self.values)

    def __repr__(self) -> str:
        return f"ArgumentFactory({self.index}, {self.values!r})"


class CaseSequence:
    """Lazy, restartable sequence of argument factories.

    Every iteration starts from scratch over the same resolved domains,
    so enumerating twice yields the same cases in the same order. Random
    domains were sampled once, at resolution time, and stay fixed for the
    life of the sequence.

    Attributes:
        slots: The parameter slots of the request.
        domains: Their resolved domains, in slot order.
        mode: The generation mode.
    """

    def __init__(
        self,
        slots: Sequence[ParameterSlot],
        domains: Sequence[ResolvedDomain],
        mode: GenerationMode,
    ) -> None:
        if len(slots) != len(domains):
            raise StructuralError(
                f"Got {len(domains)} domains for {len(slots)} parameters"
            )
        self.slots = list(slots)
        self.domains = list(domains)
        self.mode = mode

    @property
    def parameter_names(self) -> list[str]:
        return [slot.label for slot in self.slots]

    @property
    def exhaustive_count(self) -> int:
        """Number of cases exhaustive mode produces for these domains."""
        return cartesian_size(self.domains)

    def tuples(self) -> Iterator[tuple[Any, ...]]:
        """Yield the raw value tuples, without factories."""
        if self.mode is GenerationMode.PAIRWISE:
            yield from CoveringArrayReducer(self.domains).generate()
        else:
            yield from CartesianCursor(self.domains)

    def __iter__(self) -> Iterator[ArgumentFactory]:
        for index, values in enumerate(self.tuples()):
            yield ArgumentFactory(index, values)

    def __repr__(self) -> str:
        params = ", ".join(
            f"{name}({len(d)})" for name, d in zip(self.parameter_names, self.domains)
        )
        return f"CaseSequence([{params}], mode={self.mode.value})"


class CaseGenerator:
    """Turns a list of parameter slots into a CaseSequence.

    Attributes:
        mode: Default generation mode for generate().
        rng: Shared random generator for random-sample domains without a
            seed of their own.

    Example:
        >>> gen = CaseGenerator(mode=GenerationMode.PAIRWISE, seed=7)
        >>> cases = gen.generate(slots)
        >>> for factory in cases:
        ...     run_test(*factory())
    """

    def __init__(
        self,
        mode: GenerationMode | str = GenerationMode.EXHAUSTIVE,
        seed: int | None = None,
    ) -> None:
        self.mode = GenerationMode(mode)
        self.rng = random.Random(seed)

    def generate(
        self,
        slots: Sequence[ParameterSlot],
        mode: GenerationMode | str | None = None,
    ) -> CaseSequence:
        """Resolve all domains and return the case sequence.

        Args:
            slots: Parameter slots with positions ``0..N-1``.
            mode: Overrides the generator's default mode.

        Returns:
            A CaseSequence ready to be iterated by the host.

        Raises:
            ConfigurationError: If any slot cannot be resolved. Raised
                before any case is produced.
            StructuralError: If slot positions are out of order.
        """
        selected = GenerationMode(mode) if mode is not None else self.mode
        domains = resolve_domains(slots, self.rng)
        sequence = CaseSequence(slots, domains, selected)

        logger.info(
            f"Prepared {selected.value} generation for {len(slots)} parameter(s) "
            f"({sequence.exhaustive_count} exhaustive combinations)"
        )
        return sequence


def generate_cases(
    slots: Sequence[ParameterSlot],
    mode: GenerationMode | str = GenerationMode.EXHAUSTIVE,
    seed: int | None = None,
) -> CaseSequence:
    """Shortcut for ``CaseGenerator(mode, seed).generate(slots)``."""
    return CaseGenerator(mode, seed).generate(slots)


__all__ = [
    "GenerationMode",
    "ArgumentFactory",
    "CaseSequence",
    "CaseGenerator",
    "generate_cases",
]

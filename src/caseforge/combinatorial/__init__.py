"""Combinatorial case generation.

Turns the parameters of a parameterized test into the argument tuples
that drive its invocations, either exhaustively or as a pairwise
covering array.

Architecture:
    ParameterSlot -> resolve_domain -> ResolvedDomain
        -> CartesianCursor | CoveringArrayReducer -> tuples
        -> CaseSequence of ArgumentFactory -> host

Modules:
    domains: ParameterSlot, descriptor kinds, resolve_domain
    expander: CartesianCursor, cartesian_tuples, cartesian_size
    reducer: CoveringArrayReducer, CoverageStats, pairwise_tuples
    orchestrator: GenerationMode, CaseGenerator, CaseSequence, ArgumentFactory

Quick Start:
    >>> from caseforge.combinatorial import (
    ...     ParameterSlot, ExplicitValues, GenerationMode, generate_cases,
    ... )
    >>>
    >>> slots = [
    ...     ParameterSlot(0, "auth", str, ExplicitValues(["anon", "user", "admin"])),
    ...     ParameterSlot(1, "archived", bool),
    ...     ParameterSlot(2, "compact", bool),
    ... ]
    >>> cases = generate_cases(slots, GenerationMode.PAIRWISE)
    >>> for factory in cases:
    ...     test_listing(*factory())
"""

from caseforge.combinatorial.domains import (
    DEFAULT_RANDOM_MAXIMUM,
    DomainDescriptor,
    ExplicitValues,
    ExternalSequence,
    IntRange,
    ParameterSlot,
    RandomSample,
    ResolvedDomain,
    SteppedRange,
    TypeDefault,
    resolve_domain,
    resolve_domains,
)
from caseforge.combinatorial.expander import (
    CartesianCursor,
    cartesian_size,
    cartesian_tuples,
)
from caseforge.combinatorial.orchestrator import (
    ArgumentFactory,
    CaseGenerator,
    CaseSequence,
    GenerationMode,
    generate_cases,
)
from caseforge.combinatorial.reducer import (
    CoverageStats,
    CoveringArrayReducer,
    pairwise_tuples,
)

__all__ = [
    # Domains
    "DEFAULT_RANDOM_MAXIMUM",
    "DomainDescriptor",
    "ExplicitValues",
    "ExternalSequence",
    "IntRange",
    "ParameterSlot",
    "RandomSample",
    "ResolvedDomain",
    "SteppedRange",
    "TypeDefault",
    "resolve_domain",
    "resolve_domains",
    # Expander
    "CartesianCursor",
    "cartesian_size",
    "cartesian_tuples",
    # Reducer
    "CoverageStats",
    "CoveringArrayReducer",
    "pairwise_tuples",
    # Orchestrator
    "ArgumentFactory",
    "CaseGenerator",
    "CaseSequence",
    "GenerationMode",
    "generate_cases",
]

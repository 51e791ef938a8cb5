"""caseforge - argument generation for parameterized tests.

caseforge produces the argument tuples that drive repeated invocations
of a parameterized test. Each parameter gets a domain of candidate
values (literal lists, integer ranges, host-supplied sources, random
samples, or values implied by its type), and the domains are combined
either exhaustively or into a pairwise covering array.

Key Features:
    - Exhaustive generation in nested-loop order, parameter 0 outermost
    - Pairwise generation covering every two-parameter value combination
    - Configuration errors that name the offending parameter
    - YAML case files and a ``caseforge`` command for previewing cases

Example:
    >>> from caseforge import ParameterSlot, IntRange, generate_cases
    >>> slots = [
    ...     ParameterSlot(0, "retry", bool),
    ...     ParameterSlot(1, "workers", int, IntRange(start=1, count=4)),
    ... ]
    >>> for factory in generate_cases(slots, "pairwise"):
    ...     run_case(*factory())
"""

from caseforge.combinatorial import (
    ArgumentFactory,
    CaseGenerator,
    CaseSequence,
    CoverageStats,
    CoveringArrayReducer,
    ExplicitValues,
    ExternalSequence,
    GenerationMode,
    IntRange,
    ParameterSlot,
    RandomSample,
    SteppedRange,
    TypeDefault,
    generate_cases,
    resolve_domain,
)
from caseforge.errors import (
    CaseForgeError,
    ConfigLoadError,
    ConfigurationError,
    StructuralError,
)

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "ArgumentFactory",
    "CaseGenerator",
    "CaseSequence",
    "CoverageStats",
    "CoveringArrayReducer",
    "ExplicitValues",
    "ExternalSequence",
    "GenerationMode",
    "IntRange",
    "ParameterSlot",
    "RandomSample",
    "SteppedRange",
    "TypeDefault",
    "generate_cases",
    "resolve_domain",
    "CaseForgeError",
    "ConfigLoadError",
    "ConfigurationError",
    "StructuralError",
]

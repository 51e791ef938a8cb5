"""Parameter slots and domain resolution.

A ParameterSlot is one positional parameter of a parameterized test: its
ordinal position, its declared type and a raw domain descriptor saying
where its candidate values come from. Resolving a slot turns the
descriptor into a ResolvedDomain, the ordered tuple of candidate values
the generators draw from.

Descriptor kinds:
    ExplicitValues   -- literal values in declaration order
    IntRange         -- ``count`` integers starting at ``start``
    SteppedRange     -- ``start`` up to (not including) ``end`` by ``step``
    ExternalSequence -- values produced by a host-supplied callable
    RandomSample     -- ``count`` random integers in ``[minimum, maximum]``
    TypeDefault      -- derived from the declared type (bool, Enum)

Example:
    >>> from enum import Enum
    >>> class Color(Enum):
    ...     RED = 1
    ...     BLUE = 2
    >>> slots = [
    ...     ParameterSlot(0, "flag", bool),
    ...     ParameterSlot(1, "color", Color),
    ...     ParameterSlot(2, "size", int, IntRange(start=1, count=3)),
    ... ]
    >>> [resolve_domain(s) for s in slots]
    [(False, True), (<Color.RED: 1>, <Color.BLUE: 2>), (1, 2, 3)]
"""

from __future__ import annotations

import logging
import random
import types
import typing
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from caseforge.errors import ConfigurationError, ErrorCode, ErrorContext, StructuralError

logger = logging.getLogger(__name__)

# Inclusive upper bound for RandomSample when none is given.
DEFAULT_RANDOM_MAXIMUM = 2**31 - 2

ResolvedDomain = tuple[Any, ...]


@dataclass(frozen=True)
class ExplicitValues:
    """An ordered list of literal candidate values.

    Values are kept as given: no deduplication and no type checking.
    """

    values: tuple[Any, ...]
    kind: ClassVar[str] = "values"

    def __post_init__(self) -> None:
        if isinstance(self.values, (str, bytes)):
            raise ConfigurationError(
                f"Explicit values must be a sequence of values, "
                f"not {type(self.values).__name__}",
                constraint="values is a list of values",
                value=self.values,
                error_code=ErrorCode.INVALID_DOMAIN,
            )
        object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class IntRange:
    """``count`` consecutive integers beginning at ``start``."""

    start: int
    count: int
    kind: ClassVar[str] = "range"


@dataclass(frozen=True)
class SteppedRange:
    """Integers from ``start`` towards ``end`` (exclusive) by ``step``.

    A negative step counts down. A zero step never terminates and is
    rejected at resolution time.
    """

    start: int
    end: int
    step: int = 1
    kind: ClassVar[str] = "range"


@dataclass(frozen=True)
class ExternalSequence:
    """Values produced by a host-supplied callable.

    The producer is invoked once per resolution with the bound ``args``
    and ``kwargs``; its output is materialized in emission order.

    Attributes:
        producer: Callable returning an iterable of values.
        args: Positional arguments bound to the producer.
        kwargs: Keyword arguments bound to the producer.
        name: Identifier used in error messages. Defaults to the
            producer's ``__qualname__``.
    """

    producer: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict, hash=False, compare=False)
    name: str = ""
    kind: ClassVar[str] = "source"

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))
        if not self.name:
            label = getattr(self.producer, "__qualname__", None) or repr(self.producer)
            object.__setattr__(self, "name", label)


@dataclass(frozen=True)
class RandomSample:
    """``count`` integers drawn uniformly from ``[minimum, maximum]``.

    Draws are independent: values may repeat, and two resolutions of the
    same descriptor generally differ unless ``seed`` is set. Callers must
    not rely on the values being stable across runs.
    """

    minimum: int = 0
    maximum: int = DEFAULT_RANDOM_MAXIMUM
    count: int = 1
    seed: int | None = None
    kind: ClassVar[str] = "random"


@dataclass(frozen=True)
class TypeDefault:
    """Derive the domain from the parameter's declared type."""

    kind: ClassVar[str] = "default"


DomainDescriptor = Union[
    ExplicitValues,
    IntRange,
    SteppedRange,
    ExternalSequence,
    RandomSample,
    TypeDefault,
]


@dataclass(frozen=True)
class ParameterSlot:
    """One positional parameter of a generation request.

    Attributes:
        position: Ordinal position, ``0..N-1``.
        name: Parameter name, used in error messages.
        declared_type: The parameter's declared type. Only consulted for
            TypeDefault descriptors.
        descriptor: Where the candidate values come from.
    """

    position: int
    name: str = ""
    declared_type: Any = None
    descriptor: DomainDescriptor = field(default_factory=TypeDefault)

    @property
    def label(self) -> str:
        return self.name or f"arg{self.position}"

    def __repr__(self) -> str:
        kind = getattr(self.descriptor, "kind", type(self.descriptor).__name__)
        return f"ParameterSlot({self.position}, {self.label!r}, {kind})"


def resolve_domain(
    slot: ParameterSlot,
    rng: random.Random | None = None,
) -> ResolvedDomain:
    """Resolve one slot into its ordered tuple of candidate values.

    Args:
        slot: The parameter slot to resolve.
        rng: Random generator for RandomSample descriptors without a
            seed of their own. A fresh unseeded generator is used if None.

    Returns:
        The candidate values, in the order the generators will use them.

    Raises:
        ConfigurationError: If the descriptor cannot produce a domain.
        StructuralError: If the descriptor is not a known kind.
    """
    descriptor = slot.descriptor

    if isinstance(descriptor, ExplicitValues):
        values = descriptor.values
    elif isinstance(descriptor, IntRange):
        values = _resolve_int_range(slot, descriptor)
    elif isinstance(descriptor, SteppedRange):
        values = _resolve_stepped_range(slot, descriptor)
    elif isinstance(descriptor, ExternalSequence):
        values = _resolve_external(slot, descriptor)
    elif isinstance(descriptor, RandomSample):
        values = _resolve_random(slot, descriptor, rng)
    elif isinstance(descriptor, TypeDefault):
        values = _resolve_type_default(slot)
    else:
        raise StructuralError(
            f"Unknown domain descriptor {type(descriptor).__name__}",
            context=_context(slot),
        )

    logger.debug(
        f"Resolved {descriptor.kind} domain for {slot.label!r}: {len(values)} value(s)"
    )
    return values


def resolve_domains(
    slots: Sequence[ParameterSlot],
    rng: random.Random | None = None,
) -> list[ResolvedDomain]:
    """Resolve every slot of a request, in position order.

    Raises:
        StructuralError: If slot positions are not exactly ``0..N-1``.
        ConfigurationError: From the first slot that fails to resolve.
    """
    for expected, slot in enumerate(slots):
        if slot.position != expected:
            raise StructuralError(
                f"Parameter {slot.label!r} has position {slot.position}, "
                f"expected {expected}",
                context=_context(slot),
            )
    return [resolve_domain(slot, rng) for slot in slots]


def _context(slot: ParameterSlot) -> ErrorContext:
    return ErrorContext(
        parameter_name=slot.label,
        parameter_position=slot.position,
        descriptor=getattr(slot.descriptor, "kind", type(slot.descriptor).__name__),
    )


def _require_int(slot: ParameterSlot, name: str, value: Any, code: ErrorCode) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}",
            constraint=f"{name} is an integer",
            value=value,
            error_code=code,
            context=_context(slot),
        )


def _resolve_int_range(slot: ParameterSlot, descriptor: IntRange) -> ResolvedDomain:
    _require_int(slot, "start", descriptor.start, ErrorCode.INVALID_RANGE)
    _require_int(slot, "count", descriptor.count, ErrorCode.INVALID_RANGE)
    if descriptor.count < 0:
        raise ConfigurationError(
            f"Range count must not be negative, got {descriptor.count}",
            constraint="count >= 0",
            value=descriptor.count,
            error_code=ErrorCode.INVALID_RANGE,
            context=_context(slot),
        )
    return tuple(range(descriptor.start, descriptor.start + descriptor.count))


def _resolve_stepped_range(slot: ParameterSlot, descriptor: SteppedRange) -> ResolvedDomain:
    for name in ("start", "end", "step"):
        _require_int(slot, name, getattr(descriptor, name), ErrorCode.INVALID_RANGE)
    if descriptor.step == 0:
        raise ConfigurationError(
            "Range step must not be zero",
            constraint="step != 0",
            value=descriptor.step,
            error_code=ErrorCode.INVALID_RANGE,
            context=_context(slot),
        )
    return tuple(range(descriptor.start, descriptor.end, descriptor.step))


def _resolve_external(slot: ParameterSlot, descriptor: ExternalSequence) -> ResolvedDomain:
    try:
        produced = descriptor.producer(*descriptor.args, **descriptor.kwargs)
    except Exception as e:
        raise ConfigurationError(
            f"Value source {descriptor.name!r} raised {type(e).__name__}: {e}",
            constraint="source produces values",
            error_code=ErrorCode.SOURCE_FAILED,
            context=_context(slot),
            cause=e,
        ) from e

    if isinstance(produced, (str, bytes)) or not isinstance(produced, Iterable):
        raise ConfigurationError(
            f"Value source {descriptor.name!r} returned {type(produced).__name__}, "
            f"not a sequence of values",
            constraint="source returns an iterable",
            value=produced,
            error_code=ErrorCode.SOURCE_FAILED,
            context=_context(slot),
        )

    # Generator producers only fail once iterated.
    try:
        return tuple(produced)
    except Exception as e:
        raise ConfigurationError(
            f"Value source {descriptor.name!r} failed while producing values: "
            f"{type(e).__name__}: {e}",
            constraint="source produces values",
            error_code=ErrorCode.SOURCE_FAILED,
            context=_context(slot),
            cause=e,
        ) from e


def _resolve_random(
    slot: ParameterSlot,
    descriptor: RandomSample,
    rng: random.Random | None,
) -> ResolvedDomain:
    for name in ("minimum", "maximum", "count"):
        _require_int(slot, name, getattr(descriptor, name), ErrorCode.INVALID_RANDOM)
    if descriptor.count < 1:
        raise ConfigurationError(
            f"Random sample count must be positive, got {descriptor.count}",
            constraint="count >= 1",
            value=descriptor.count,
            error_code=ErrorCode.INVALID_RANDOM,
            context=_context(slot),
        )
    if descriptor.minimum > descriptor.maximum:
        raise ConfigurationError(
            f"Random sample minimum {descriptor.minimum} exceeds "
            f"maximum {descriptor.maximum}",
            constraint="minimum <= maximum",
            value=(descriptor.minimum, descriptor.maximum),
            error_code=ErrorCode.INVALID_RANDOM,
            context=_context(slot),
        )

    if descriptor.seed is not None:
        rng = random.Random(descriptor.seed)
    elif rng is None:
        rng = random.Random()

    return tuple(
        rng.randint(descriptor.minimum, descriptor.maximum)
        for _ in range(descriptor.count)
    )


def _resolve_type_default(slot: ParameterSlot) -> ResolvedDomain:
    base, nullable = _unwrap_optional(slot.declared_type)

    if base is bool:
        values: list[Any] = [False, True]
    elif isinstance(base, type) and issubclass(base, Enum):
        values = list(base)
    else:
        type_name = getattr(slot.declared_type, "__name__", None) or repr(slot.declared_type)
        raise ConfigurationError(
            f"No domain given and type {type_name} has no implicit values",
            constraint="declared type is bool or Enum",
            value=slot.declared_type,
            error_code=ErrorCode.UNRESOLVABLE_TYPE,
            context=_context(slot),
        )

    if nullable:
        values.append(None)
    return tuple(values)


def _unwrap_optional(declared_type: Any) -> tuple[Any, bool]:
    """Split ``Optional[X]`` / ``X | None`` into ``(X, True)``."""
    origin = typing.get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(declared_type)
        members = [a for a in args if a is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            return members[0], True
    return declared_type, False


__all__ = [
    "DEFAULT_RANDOM_MAXIMUM",
    "ResolvedDomain",
    "ExplicitValues",
    "IntRange",
    "SteppedRange",
    "ExternalSequence",
    "RandomSample",
    "TypeDefault",
    "DomainDescriptor",
    "ParameterSlot",
    "resolve_domain",
    "resolve_domains",
]

"""Models for YAML case files.

A case file lists the parameters of one generation request:

    mode: pairwise
    parameters:
      - name: retry
        type: bool
      - name: workers
        range: {start: 1, count: 4}
      - name: batch
        range: {start: 0, end: 100, step: 25}
      - name: region
        values: [eu, us, ap]
      - name: user
        source: {ref: "tests.fixtures:make_users", args: [3]}
      - name: payload_size
        random: {minimum: 1, maximum: 4096, count: 3}
      - name: color
        type: "shop.models:Color?"

``type`` is only consulted when no domain is given. It accepts ``bool``,
``int``, ``str``, ``float`` or a ``module:attribute`` reference; a
trailing ``?`` makes it nullable.

Numeric constraints (non-negative counts, non-zero steps, ordered random
bounds) are checked when the domain is resolved, so the resulting error
names the parameter.
"""

from __future__ import annotations

import importlib
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from caseforge.combinatorial.domains import (
    DEFAULT_RANDOM_MAXIMUM,
    DomainDescriptor,
    ExplicitValues,
    ExternalSequence,
    IntRange,
    ParameterSlot,
    RandomSample,
    SteppedRange,
    TypeDefault,
)
from caseforge.combinatorial.orchestrator import GenerationMode
from caseforge.errors import ConfigLoadError

BUILTIN_TYPES: dict[str, type] = {
    "bool": bool,
    "int": int,
    "str": str,
    "float": float,
}


def import_reference(ref: str) -> Any:
    """Import ``module:attribute`` (attribute may be dotted)."""
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigLoadError(f"Reference {ref!r} is not in 'module:attribute' form")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigLoadError(f"Cannot import module {module_name!r}: {e}", cause=e) from e

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigLoadError(
                f"Module {module_name!r} has no attribute {attr_path!r}", cause=e
            ) from e
    return target


def resolve_type_name(name: str) -> Any:
    """Map a case-file type name to a Python type."""
    nullable = name.endswith("?")
    base_name = name[:-1] if nullable else name

    if base_name in BUILTIN_TYPES:
        base: Any = BUILTIN_TYPES[base_name]
    elif ":" in base_name:
        base = import_reference(base_name)
    else:
        raise ConfigLoadError(
            f"Unknown type {name!r}; use one of {sorted(BUILTIN_TYPES)} "
            f"or a 'module:attribute' reference"
        )

    return Optional[base] if nullable else base


class RangeSpec(BaseModel):
    """``{start, count}`` or ``{start, end, step}``."""

    model_config = ConfigDict(extra="forbid")

    start: int = 0
    count: int | None = None
    end: int | None = None
    step: int | None = None

    @model_validator(mode="after")
    def check_form(self) -> RangeSpec:
        if (self.count is None) == (self.end is None):
            raise ValueError("range needs exactly one of 'count' or 'end'")
        if self.count is not None and self.step is not None:
            raise ValueError("'step' is only allowed together with 'end'")
        return self

    def to_descriptor(self) -> IntRange | SteppedRange:
        if self.count is not None:
            return IntRange(start=self.start, count=self.count)
        assert self.end is not None
        return SteppedRange(
            start=self.start,
            end=self.end,
            step=1 if self.step is None else self.step,
        )


class SourceSpec(BaseModel):
    """A ``module:attribute`` callable producing the values."""

    model_config = ConfigDict(extra="forbid")

    ref: str
    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)

    def to_descriptor(self) -> ExternalSequence:
        producer = import_reference(self.ref)
        if not callable(producer):
            raise ConfigLoadError(f"Source {self.ref!r} is not callable")
        return ExternalSequence(
            producer=producer,
            args=tuple(self.args),
            kwargs=dict(self.kwargs),
            name=self.ref,
        )


class RandomSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    minimum: int = 0
    maximum: int = DEFAULT_RANDOM_MAXIMUM
    count: int = 1
    seed: int | None = None

    def to_descriptor(self) -> RandomSample:
        return RandomSample(
            minimum=self.minimum,
            maximum=self.maximum,
            count=self.count,
            seed=self.seed,
        )


class ParameterSpec(BaseModel):
    """One parameter entry of a case file."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: str | None = None
    values: list[Any] | None = None
    range: RangeSpec | None = None
    source: SourceSpec | None = None
    random: RandomSpec | None = None

    @field_validator("source", mode="before")
    @classmethod
    def expand_source_shorthand(cls, v: Any) -> Any:
        if isinstance(v, str):
            return {"ref": v}
        return v

    @model_validator(mode="after")
    def check_single_domain(self) -> ParameterSpec:
        given = [
            key
            for key in ("values", "range", "source", "random")
            if getattr(self, key) is not None
        ]
        if len(given) > 1:
            raise ValueError(
                f"parameter '{self.name}' has more than one domain: {', '.join(given)}"
            )
        return self

    def to_descriptor(self) -> DomainDescriptor:
        if self.values is not None:
            return ExplicitValues(tuple(self.values))
        if self.range is not None:
            return self.range.to_descriptor()
        if self.source is not None:
            return self.source.to_descriptor()
        if self.random is not None:
            return self.random.to_descriptor()
        return TypeDefault()

    def to_slot(self, position: int) -> ParameterSlot:
        declared = resolve_type_name(self.type) if self.type else None
        return ParameterSlot(
            position=position,
            name=self.name,
            declared_type=declared,
            descriptor=self.to_descriptor(),
        )


class CaseFile(BaseModel):
    """A whole case file: an optional mode and the ordered parameters."""

    model_config = ConfigDict(extra="forbid")

    mode: GenerationMode | None = None
    parameters: list[ParameterSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_names(self) -> CaseFile:
        names = [p.name for p in self.parameters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate parameter names: {duplicates}")
        return self

    def to_slots(self) -> list[ParameterSlot]:
        """Build parameter slots in file order.

        Raises:
            ConfigLoadError: If a type or source reference cannot be imported.
        """
        return [spec.to_slot(position) for position, spec in enumerate(self.parameters)]

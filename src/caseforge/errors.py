"""Exception hierarchy for caseforge.

Every caseforge error carries:
- error_code: an ErrorCode enum member for programmatic handling
- context: ErrorContext naming the parameter that failed (if any)
- suggestions: actionable steps to resolve the issue

Configuration errors are the ones users see most often. They always name
the offending parameter and the constraint it violated, so a failing
test can be fixed without re-deriving how its domain was built.

Example:
    try:
        cases = generate_cases(slots)
    except ConfigurationError as e:
        print(e.format_verbose())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for caseforge.

    Codes are organized by category:
    - E2xx: Configuration errors (bad descriptors, unloadable files)
    - E9xx: Internal errors (broken invariants)
    """

    # Configuration errors (E2xx)
    INVALID_DOMAIN = "E201"
    INVALID_RANGE = "E202"
    INVALID_RANDOM = "E203"
    UNRESOLVABLE_TYPE = "E204"
    SOURCE_FAILED = "E205"
    CONFIG_LOAD_FAILED = "E210"

    # Internal errors (E9xx)
    STRUCTURAL = "E901"
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if 200 <= code_num < 300:
            return "configuration"
        return "internal"


@dataclass
class ErrorContext:
    """Where an error happened.

    Attributes:
        parameter_name: Name of the parameter being resolved.
        parameter_position: Ordinal position of that parameter.
        descriptor: Kind of domain descriptor involved (e.g. "range").
        extra: Additional context-specific information.
    """

    parameter_name: str | None = None
    parameter_position: int | None = None
    descriptor: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {
            "parameter_name": self.parameter_name,
            "parameter_position": self.parameter_position,
            "descriptor": self.descriptor,
            "extra": self.extra or None,
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.parameter_name:
            parts.append(f"parameter={self.parameter_name}")
        if self.parameter_position is not None:
            parts.append(f"position={self.parameter_position}")
        if self.descriptor:
            parts.append(f"descriptor={self.descriptor}")
        return " > ".join(parts) if parts else "unknown location"


class CaseForgeError(Exception):
    """Base exception for all caseforge errors.

    Attributes:
        error_code: Unique ErrorCode for this error type.
        message: Human-readable error description.
        context: ErrorContext with the failing parameter.
        suggestions: Actionable steps to resolve the issue.
        recoverable: Whether fixing input and retrying can succeed.
        cause: The underlying exception (if any).
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool = True,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [
            f"Error [{self.error_code.value}]: {self.message}",
        ]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.cause is not None:
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(CaseForgeError):
    """A parameter cannot produce a resolved domain.

    Raised for unresolvable default types, invalid range or random-sampling
    bounds, zero steps and failing external producers. The ``constraint``
    attribute names the rule that was violated.
    """

    error_code = ErrorCode.INVALID_DOMAIN
    default_message = "Parameter domain could not be resolved"
    default_suggestions = [
        "Check the domain descriptor attached to the named parameter",
        "Give parameters that are not bool or Enum an explicit domain",
    ]

    def __init__(
        self,
        message: str | None = None,
        constraint: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.constraint = constraint
        self.value = value
        kwargs.setdefault("recoverable", False)
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        base = super().__str__()
        if self.constraint:
            base = f"{base} (constraint: {self.constraint})"
        return base

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["constraint"] = self.constraint
        result["value"] = repr(self.value)
        return result


class StructuralError(CaseForgeError):
    """An internal invariant was broken.

    Signals a programming defect in the caller or in caseforge itself,
    such as slot positions out of order or a domain count that does not
    match the parameter count. Never expected in correct usage.
    """

    error_code = ErrorCode.STRUCTURAL
    default_message = "Internal invariant violated"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("recoverable", False)
        super().__init__(message=message, **kwargs)


class ConfigLoadError(CaseForgeError):
    """A case file or settings file could not be loaded."""

    error_code = ErrorCode.CONFIG_LOAD_FAILED
    default_message = "Configuration could not be loaded"
    default_suggestions = [
        "Check the YAML syntax of the file",
        "Give each parameter at most one of: values, range, source, random",
    ]

    def __init__(
        self,
        message: str | None = None,
        path: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.path = path
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        base = super().__str__()
        if self.path:
            base = f"{base} (path: {self.path})"
        return base


__all__ = [
    "ErrorCode",
    "ErrorContext",
    "CaseForgeError",
    "ConfigurationError",
    "StructuralError",
    "ConfigLoadError",
]

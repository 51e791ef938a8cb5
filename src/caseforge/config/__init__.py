"""Configuration management for caseforge."""

from caseforge.config.loader import load_case_file
from caseforge.config.schema import (
    CaseFile,
    ParameterSpec,
    RandomSpec,
    RangeSpec,
    SourceSpec,
    import_reference,
    resolve_type_name,
)
from caseforge.config.settings import GeneratorSettings, load_settings

__all__ = [
    "GeneratorSettings",
    "load_settings",
    "load_case_file",
    "CaseFile",
    "ParameterSpec",
    "RangeSpec",
    "RandomSpec",
    "SourceSpec",
    "import_reference",
    "resolve_type_name",
]

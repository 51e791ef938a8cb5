"""Loading YAML case files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from caseforge.config.schema import CaseFile
from caseforge.errors import ConfigLoadError


def load_case_file(path: str | Path) -> CaseFile:
    """Read and validate a case file.

    Raises:
        ConfigLoadError: If the file is missing, is not valid YAML, or does
            not match the case-file schema.
    """
    path = Path(path)
    data = _load_yaml(path)

    try:
        return CaseFile.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigLoadError(
            f"Invalid case file: {details}",
            path=str(path),
            cause=e,
        ) from e


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigLoadError(f"Case file not found: {path}", path=str(path))

    try:
        with open(path) as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(
            f"Failed to parse YAML case file: {e}",
            path=str(path),
            cause=e,
        ) from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigLoadError(
            f"Case file must be a YAML object, got {type(content).__name__}",
            path=str(path),
        )
    return content

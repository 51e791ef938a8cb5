"""Pytest fixtures for caseforge tests."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

import pytest

from caseforge.combinatorial import ParameterSlot


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


def find_missing_pairs(
    domains: Sequence[Sequence[Any]],
    tuples: Sequence[Sequence[Any]],
) -> list[tuple[int, Any, int, Any]]:
    """Every (i, a, j, b) with i < j that no tuple covers.

    Compares by equality so unhashable values work too.
    """
    missing = []
    for i in range(len(domains)):
        for j in range(i + 1, len(domains)):
            for a in domains[i]:
                for b in domains[j]:
                    if not any(t[i] == a and t[j] == b for t in tuples):
                        missing.append((i, a, j, b))
    return missing


@pytest.fixture
def missing_pairs() -> Callable[..., list[tuple[int, Any, int, Any]]]:
    return find_missing_pairs


@pytest.fixture
def bool_slots() -> list[ParameterSlot]:
    """Three boolean parameters with type-derived domains."""
    return [
        ParameterSlot(0, "a", bool),
        ParameterSlot(1, "b", bool),
        ParameterSlot(2, "c", bool),
    ]


@pytest.fixture(autouse=True)
def restore_caseforge_logger():
    """Undo handlers and levels installed by setup_logging()."""
    logger = logging.getLogger("caseforge")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


SAMPLE_MODULE = "caseforge_sample_fixtures"

SAMPLE_SOURCE = '''
from enum import Enum


class Size(Enum):
    SMALL = "s"
    LARGE = "l"


def make_users(n, prefix="user"):
    return [f"{prefix}{i}" for i in range(n)]


NOT_CALLABLE = [1, 2, 3]
'''


@pytest.fixture
def sample_module(tmp_path, monkeypatch) -> str:
    """An importable module with an Enum and a value source."""
    (tmp_path / f"{SAMPLE_MODULE}.py").write_text(SAMPLE_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, SAMPLE_MODULE, raising=False)
    return SAMPLE_MODULE


@pytest.fixture
def write_yaml(tmp_path) -> Callable[[str, str], str]:
    """Write a YAML document under tmp_path and return its path."""

    def _write(content: str, name: str = "cases.yaml") -> str:
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return _write

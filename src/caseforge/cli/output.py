"""Rich rendering for the caseforge command line."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

from caseforge.combinatorial import CaseSequence, CoverageStats


def format_value(value: Any) -> str:
    """Short display form of a case value."""
    if isinstance(value, str):
        return value
    return repr(value)


def render_cases(sequence: CaseSequence, console: Console) -> int:
    """Print every case of ``sequence`` as a table row.

    Returns:
        Number of cases printed.
    """
    table = Table(title=f"{sequence.mode.value} cases", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    for name in sequence.parameter_names:
        table.add_column(name)

    count = 0
    for factory in sequence:
        table.add_row(str(factory.index + 1), *(format_value(v) for v in factory()))
        count += 1

    console.print(table)
    console.print(f"[bold]{count}[/bold] case(s), {sequence.exhaustive_count} exhaustive")
    return count


def render_stats(stats: CoverageStats, console: Console) -> None:
    """Print pairwise coverage statistics."""
    table = Table(title="Pairwise coverage", show_header=False)
    table.add_column("metric", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Exhaustive cases", str(stats.exhaustive_count))
    table.add_row("Pairwise cases", str(stats.test_count))
    table.add_row("Required pairs", str(stats.total_pairs))
    table.add_row("Covered pairs", str(stats.covered_pairs))
    style = "green" if stats.complete else "red"
    table.add_row("Coverage", f"[{style}]{stats.coverage_pct:.1f}%[/{style}]")
    console.print(table)

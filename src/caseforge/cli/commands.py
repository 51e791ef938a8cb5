"""CLI commands for caseforge."""

from __future__ import annotations

import json
import logging
import sys

import click
from rich.console import Console

from caseforge.cli.output import render_cases, render_stats
from caseforge.combinatorial import (
    CaseGenerator,
    CaseSequence,
    CoveringArrayReducer,
    GenerationMode,
)
from caseforge.config import GeneratorSettings, load_case_file, load_settings
from caseforge.errors import CaseForgeError
from caseforge.logs import setup_logging

logger = logging.getLogger(__name__)

MODE_CHOICES = [mode.value for mode in GenerationMode]


def _fail(error: CaseForgeError) -> None:
    click.echo(error.format_verbose(), err=True)
    sys.exit(2)


def _build_sequence(
    settings: GeneratorSettings,
    case_file: str,
    mode: str | None,
    seed: int | None,
) -> CaseSequence:
    """Load a case file and prepare its cases.

    Mode priority: --mode > case file > settings.
    """
    spec = load_case_file(case_file)
    selected = GenerationMode(mode) if mode else (spec.mode or settings.mode)
    generator = CaseGenerator(
        mode=selected,
        seed=seed if seed is not None else settings.random_seed,
    )
    return generator.generate(spec.to_slots())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to settings file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """caseforge - exhaustive and pairwise argument generation."""
    ctx.ensure_object(dict)

    try:
        settings = load_settings(config)
    except CaseForgeError as e:
        _fail(e)
        return

    if verbose:
        settings.log_level = "DEBUG"

    ctx.obj["settings"] = settings
    setup_logging(settings.log_level, json_format=settings.log_format == "json")


@cli.command()
@click.argument("case_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--mode", "-m", type=click.Choice(MODE_CHOICES), default=None,
              help="Generation mode (overrides case file and settings)")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--seed", type=int, default=None, help="Seed for random domains")
@click.pass_context
def cases(
    ctx: click.Context,
    case_file: str,
    mode: str | None,
    output_format: str,
    seed: int | None,
) -> None:
    """Print the argument tuples generated for CASE_FILE."""
    settings: GeneratorSettings = ctx.obj["settings"]

    try:
        sequence = _build_sequence(settings, case_file, mode, seed)
    except CaseForgeError as e:
        _fail(e)
        return

    if output_format == "json":
        payload = {
            "mode": sequence.mode.value,
            "parameters": sequence.parameter_names,
            "exhaustive_count": sequence.exhaustive_count,
            "cases": [factory() for factory in sequence],
        }
        click.echo(json.dumps(payload, indent=2, default=str))
    else:
        render_cases(sequence, Console())


@cli.command()
@click.argument("case_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--seed", type=int, default=None, help="Seed for random domains")
@click.pass_context
def stats(ctx: click.Context, case_file: str, seed: int | None) -> None:
    """Compare pairwise and exhaustive case counts for CASE_FILE."""
    settings: GeneratorSettings = ctx.obj["settings"]

    try:
        sequence = _build_sequence(settings, case_file, GenerationMode.PAIRWISE.value, seed)
    except CaseForgeError as e:
        _fail(e)
        return

    reducer = CoveringArrayReducer(sequence.domains)
    coverage = reducer.coverage_stats(list(sequence.tuples()))
    logger.debug(f"Coverage for {case_file}: {coverage!r}")
    render_stats(coverage, Console())

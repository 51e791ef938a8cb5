"""caseforge CLI - command line interface for caseforge."""

from caseforge.cli.commands import cli


def main() -> None:
    """Main entry point for the caseforge CLI."""
    cli()


__all__ = ["main", "cli"]

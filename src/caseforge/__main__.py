"""Allow running caseforge as a module: python -m caseforge."""

from caseforge.cli import main

if __name__ == "__main__":
    main()

"""Entry point for running refdocs as a module: python -m refdocs.

This enables:
    python -m refdocs generate model.json --spec-version v1.29.0
"""

from refdocs.api.cli.main import main

if __name__ == "__main__":
    main()

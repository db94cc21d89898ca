"""Entry point: python -m namedclosure."""

from namedclosure.presentation.cli import main

raise SystemExit(main())

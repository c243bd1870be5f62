"""Allow running the CLI with ``python -m build_validation``."""

from build_validation.cli.main import app

app()

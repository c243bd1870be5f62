"""Main CLI application for Gradle build validation."""

import typer

from build_validation.cli import validate

app = typer.Typer(
    name="build-validation",
    help="Build Validation - Gradle experiments",
    add_completion=False,
    no_args_is_help=True,
)

# Register commands
app.command(
    name="incremental-build",
    help="Experiment 01: validate that a Gradle build is optimized for incremental building",
)(validate.incremental_build)


@app.callback()
def main() -> None:
    """Automated experiments that validate Gradle build optimizations."""


if __name__ == "__main__":
    app()

"""Error types raised while running an experiment.

Every error carries the process exit code the CLI terminates with.
"""


class BuildValidationError(Exception):
    """Base class for all experiment failures."""

    exit_code: int = 1


class ConfigError(BuildValidationError):
    """A required configuration field is missing or invalid."""

    exit_code = 2

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Missing required configuration: {field}")


class ProcessError(BuildValidationError):
    """An external process (git, gradlew) exited unsuccessfully."""

    exit_code = 3

    def __init__(self, command: list[str], returncode: int, output: str = "", output_shown: bool = False):
        self.command = command
        self.returncode = returncode
        self.output = output
        # build output is streamed live, git output is not
        self.output_shown = output_shown
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(command)}")


class ParseError(BuildValidationError):
    """Build output did not contain a well-formed build scan URL."""

    exit_code = 4

"""structlog setup for experiment runs.

The rich console owns stdout: it shows the build output, the wizard and the
summary. Log events (clone, builds, scans, warnings) go to stderr, as JSON
for CI pipelines or as colored key/value lines in a terminal.
"""

import logging
import sys

import structlog

LOGGER_NAME = "build_validation"


def _renderer(json_format: bool) -> structlog.typing.Processor:
    if json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(level: str = "WARNING", json_format: bool = False) -> structlog.stdlib.BoundLogger:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        level: Minimum level name, case-insensitive (``--verbose`` passes DEBUG)
        json_format: Emit one JSON object per event instead of console lines

    Returns:
        The ``build_validation`` logger.
    """
    pre_chain: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_renderer(json_format), foreign_pre_chain=pre_chain)
    )

    # a second call (e.g. repeated CLI invocations in one process) replaces the handler
    root = logging.getLogger()
    root.handlers[:] = [stderr_handler]
    root.setLevel(level.upper())

    return structlog.get_logger(LOGGER_NAME)


def get_logger() -> structlog.stdlib.BoundLogger:
    """Logger shared by the runner, git client and build invoker."""
    return structlog.get_logger(LOGGER_NAME)

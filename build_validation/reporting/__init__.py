"""Terminal reporting of experiment results."""

from build_validation.reporting.summary import print_summary, print_warnings, quick_links, repeat_command

__all__ = ["print_summary", "print_warnings", "quick_links", "repeat_command"]

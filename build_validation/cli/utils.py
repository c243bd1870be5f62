"""Rich UI utilities for CLI commands."""

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

console = Console()


class RichPrompter:
    """Wizard prompter that reads answers from the terminal."""

    def __init__(self, console: Console = console):
        self.console = console

    def pause(self, message: str) -> None:
        """Wait for <Enter>."""
        self.console.print()
        self.console.input(f"[bold yellow]{message}[/bold yellow]")

    def ask(self, question: str, default: str = "") -> str:
        """Ask a question, offering ``default`` when one is set."""
        answer = Prompt.ask(
            f"\n[bold cyan]{question}[/bold cyan]",
            console=self.console,
            default=default or None,
            show_default=bool(default),
        )
        return answer or ""


def error_panel(message: str, title: str = "Error") -> Panel:
    """Create a red error panel."""
    return Panel(message, title=title, border_style="red")


def warning_panel(message: str, title: str = "Warning") -> Panel:
    """Create a yellow warning panel."""
    return Panel(message, title=title, border_style="yellow")


def success_panel(message: str, title: str = "Success") -> Panel:
    """Create a green success panel."""
    return Panel(message, title=title, border_style="green")

"""
console.py

Responsibility: the single Rich console used for user-facing output.

Logging goes through `logging`; everything the user is meant to read while the
generator runs (banner, spinners, success/failure lines) goes through here.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console()


def print_banner() -> None:
    banner = Text("NODE JS\nKICKOFF", style="bold green", justify="center")
    console.print(Panel(banner, border_style="green", expand=True))


def print_success(message: str) -> None:
    console.print(f"[bold green]✔ {message}[/bold green]")


def print_error(message: str) -> None:
    console.print(f"[bold red]✖ {message}[/bold red]", soft_wrap=True)

"""Installer status lines. info/success/muted go to stdout, warn/error to stderr."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


@contextmanager
def chatter_to_stderr(enabled: bool = True) -> Iterator[None]:
    """Send every status line to stderr so stdout carries only the record."""
    global console
    saved = console
    if enabled:
        console = err_console
    try:
        yield
    finally:
        console = saved


def section(title: str) -> None:
    console.print(f"\n[bold cyan]{escape(title)}[/]\n")


def info(message: str) -> None:
    console.print(f"  [cyan]→[/] {message}")


def success(message: str) -> None:
    console.print(f"  [green]✓[/] {message}")


def muted(message: str) -> None:
    console.print(f"[dim]{message}[/]")


def warn(message: str) -> None:
    err_console.print(f"  [yellow]⚠[/] {message}")


def error(message: str) -> None:
    err_console.print(f"  [red]✗[/] {message}")

"""Prompt helpers built on rich.prompt."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from rich.prompt import Confirm, Prompt

from openclaw_installer.output import messages

T = TypeVar("T")


def prompt_required(text: str, *, secret: bool = False) -> str:
    """Ask until a non-empty answer is given."""
    while True:
        value = Prompt.ask(
            f"[bold]{text}[/]", password=secret, console=messages.console,
        ) or ""
        value = value.strip()
        if value:
            return value
        messages.error("This field is required. Please enter a value.")


def prompt_optional(
    text: str,
    default: str = "",
    *,
    secret: bool = False,
    blank_hint: str = "leave blank to skip",
) -> str:
    """Ask once; an empty answer falls back to *default*."""
    if default:
        label = f"[bold]{text}[/] [dim]\\[{default}][/]"
    else:
        label = f"[bold]{text}[/] [dim]\\[{blank_hint}][/]"
    value = Prompt.ask(label, password=secret, console=messages.console) or ""
    value = value.strip()
    return value or default


def prompt_validated(
    text: str,
    validate: Callable[[str], bool],
    error: str,
) -> str:
    """Ask for a required value until *validate* accepts it."""
    while True:
        value = prompt_required(text)
        if validate(value):
            return value
        messages.error(error)


def prompt_menu(
    text: str,
    options: Sequence[T],
    labels: Sequence[str],
    *,
    default: int | None = None,
) -> T:
    """Show a numbered menu and return the chosen option.

    Invalid selections re-prompt without limit. *default* is the 1-based
    entry used when the answer is empty.
    """
    for i, label in enumerate(labels, start=1):
        messages.console.print(f"  [dim]{i})[/] {label}")
    messages.console.print()
    numbers = [str(i) for i in range(1, len(options) + 1)]
    hint = "/".join(numbers)
    while True:
        answer = Prompt.ask(f"[bold]{text} \\[{hint}][/]", console=messages.console) or ""
        answer = answer.strip()
        if not answer and default is not None:
            return options[default - 1]
        if answer in numbers:
            return options[int(answer) - 1]
        messages.error(f"Please enter {', '.join(numbers[:-1])}, or {numbers[-1]}.")


def prompt_confirm(text: str, *, default: bool = False) -> bool:
    """Yes/no question; rich re-asks on anything but y/n."""
    return Confirm.ask(f"[bold]{text}[/]", default=default, console=messages.console)


def split_allow_list(raw: str) -> list[str]:
    """Split a comma separated allow-list into its non-empty items."""
    return [item.strip() for item in raw.split(",") if item.strip()]

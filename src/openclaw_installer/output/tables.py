"""Rich table rendering helpers."""

from __future__ import annotations

from typing import Any

from rich.table import Table
from rich.text import Text


def _cell(value: Any) -> Text:
    # Values are data, never markup.
    if value is None:
        return Text("")
    if isinstance(value, (list, tuple)):
        return Text("\n".join(str(v) for v in value))
    return Text(str(value))


def kv_table(data: dict[str, Any], *, title: str | None = None) -> Table:
    """Render a key-value dict as a two-column table."""
    table = Table(title=title, show_header=False, show_lines=False)
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, _cell(value))
    return table

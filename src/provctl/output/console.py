"""Rich Console factory and theme for provctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PROV_THEME = Theme(
    {
        "prov.ok": "bold green",
        "prov.error": "bold red",
        "prov.warning": "bold yellow",
        "prov.op": "bold cyan",
        "prov.key": "dim",
        "prov.path": "dim",
        "prov.schema.legacy": "yellow",
        "prov.schema.modern": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=PROV_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()

"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from provctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from provctl.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    if result.op == "provision" and result.data.get("artifact"):
        return str(result.data["artifact"])
    return f"OK: {result.op}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="prov.ok"), Text(f"  {result.op}", style="prov.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="prov.key")
    if key == "schema":
        v = Text(str(value), style=f"prov.schema.{value}")
    elif key.endswith("path") or key in ("sandbox", "artifact"):
        v = Text(str(value), style="prov.path")
    elif isinstance(value, list):
        v = Text(", ".join(str(item) for item in value) if value else "-")
    else:
        v = Text("-" if value is None else str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    table = Table(title="steps", show_header=True, header_style="prov.key")
    table.add_column("step")
    table.add_column("ms", justify="right")
    for child in telemetry.get("children", []):
        table.add_row(child["name"], f"{child['duration_ms']:.2f}")
    table.add_row(Text(telemetry["name"], style="bold"), f"{telemetry['duration_ms']:.2f}")
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_provision(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    order = (
        "version",
        "schema",
        "sandbox",
        "listener_inserted",
        "artifact",
        "artifact_files",
        "service",
        "properties",
        "linked_libraries",
    )
    for key in order:
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        for key, value in result.data.items():
            if key not in order:
                _field(console, key, value)
        _render_meta(console, result)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    console.print(
        Text("ERROR", style="prov.error"),
        Text(f"  {result.op}", style="prov.op"),
        Text(f"  {message}"),
    )
    if error is None:
        return
    step = error.detail.get("step")
    if step:
        _field(console, "failed_step", step)
    if verbose or "completed" in error.detail:
        _field(console, "completed", error.detail.get("completed", []))
    if verbose:
        _field(console, "code", error.code)


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "provision": _render_provision,
}

"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from buildplan.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from buildplan.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# Item key printed per line in --quiet mode, by op.
_QUIET_KEYS: dict[str, str] = {
    "plugins": "id",
    "repositories": "url",
    "build_dirs": "build_dir",
    "order": "project",
    "tasks": "name",
}


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    key = _QUIET_KEYS.get(result.op)
    items = result.data.get("items")
    if key and isinstance(items, list):
        return "\n".join(str(item[key]) for item in items if key in item)
    if result.op == "clean":
        return str(result.data.get("path", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="bp.ok")
    op = Text(f"  {result.op}", style="bp.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="bp.key")
    if key in ("path", "root_build_dir", "project_root"):
        v = Text(str(value), style="bp.path")
    elif key == "project":
        v = Text(str(value), style="bp.project")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only); ``timing`` gets its own layout."""
    if not result.meta:
        return

    console.print()
    for k, v in result.meta.items():
        if k == "timing":
            _render_timing(console, v)
        else:
            console.print(Text(f"  {k}: {v}", style="dim"))


def _timing_style(duration_ms: float) -> str:
    if duration_ms > 1000:
        return "bold red"
    if duration_ms > 100:
        return "yellow"
    return "dim"


def _render_timing(console: Console, timing: dict[str, Any]) -> None:
    """One line for the operation, one indented line per step."""
    total = timing.get("duration_ms", 0.0)
    console.print(
        Text("  timing:", style="dim"),
        Text(f"{total:.2f}ms", style=_timing_style(total)),
        Text(f" {timing.get('op', '?')}", style="dim"),
    )
    for name, ms in timing.get("steps", {}).items():
        console.print(
            Text(f"    {name}:", style="dim"),
            Text(f"{ms:.2f}ms", style=_timing_style(ms)),
        )


def _table(columns: list[tuple[str, str]], rows: list[list[str]]) -> Table:
    """Build a plain Rich Table from ``(header, style)`` pairs and rows."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for header, style in columns:
        table.add_column(header, style=style or None, no_wrap=True)
    for row in rows:
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="bp.error")
    op = Text(f"  {result.op}", style="bp.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Table renderers ───────────────────────────────────────────────────


def _render_plugins(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    rows = [
        [p["id"], "yes" if p["apply"] else "no", p.get("version") or "managed"]
        for p in result.data.get("items", [])
    ]
    console.print(_table([("Plugin", "bold"), ("Apply", ""), ("Version", "dim")], rows))
    if verbose:
        _render_meta(console, result)


def _render_repositories(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    _status_line(console, result)
    _field(console, "scope", result.data.get("scope", ""))
    if "project" in result.data:
        _field(console, "project", result.data["project"])
    rows = [[str(r["priority"]), r["url"]] for r in result.data.get("items", [])]
    console.print(_table([("#", "dim"), ("URL", "bp.url")], rows))
    if verbose:
        _render_meta(console, result)


def _render_build_dirs(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "root_build_dir", result.data.get("root_build_dir", ""))
    rows = [[d["project"], d["build_dir"]] for d in result.data.get("items", [])]
    if rows:
        console.print(_table([("Project", "bp.project"), ("Build dir", "bp.path")], rows))
    if verbose:
        _render_meta(console, result)


def _render_order(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    rows = [
        [str(o["position"]), o["project"], ", ".join(o.get("after", []))]
        for o in result.data.get("items", [])
    ]
    console.print(_table([("#", "dim"), ("Project", "bp.project"), ("After", "dim")], rows))
    if verbose:
        _render_meta(console, result)


def _render_tasks(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for item in result.data.get("items", []):
        console.print(f"  {item['name']}")
    if verbose:
        _render_meta(console, result)


def _render_clean(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "path", result.data.get("path", ""))
    state = "deleted" if result.data.get("deleted") else "already clean"
    console.print(Text(f"  {state}", style="dim"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "plugins": _render_plugins,
    "repositories": _render_repositories,
    "build_dirs": _render_build_dirs,
    "order": _render_order,
    "tasks": _render_tasks,
    "clean": _render_clean,
}

"""CLI entry point for docgraph -- inspect and serve a documentation graph."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .errors import DocGraphError
from .models import GraphConfig, TreeEntry

app = typer.Typer(
    name="docgraph",
    help="Interactive documentation graph: build, search, lay out and serve.",
    add_completion=False,
)

console = Console()


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _fail(exc: Exception) -> None:
    console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(code=1)


def _load_settings(debug: bool = False, **overrides: object) -> GraphConfig:
    """Resolve config: CLI flag > .docgraph/config.toml > default."""
    from .config import apply_overrides, configure_logging, find_config, load_config

    try:
        cfg = apply_overrides(load_config(find_config()), **overrides)
    except DocGraphError as exc:
        _fail(exc)
    if debug:
        cfg = cfg.model_copy(update={"debug_logging": True})
    configure_logging(cfg.debug_logging)
    return cfg


def _load_tree(tree_file: Path | None) -> list[TreeEntry]:
    from .tree import DEFAULT_TREE, load_tree

    if tree_file is None:
        return list(DEFAULT_TREE)
    try:
        return load_tree(tree_file)
    except DocGraphError as exc:
        _fail(exc)


TreeOption = typer.Option(None, "--tree", "-t", help="Content tree JSON (default: built-in docs tree).")
DebugOption = typer.Option(False, "--debug", help="Enable debug logging.")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def stats(
    tree_file: Optional[Path] = TreeOption,
    debug: bool = DebugOption,
) -> None:
    """Summarise the node/edge model built from a content tree."""
    from .builder import build_graph_model
    from .models import RELATED_WEIGHT

    _load_settings(debug)
    model = build_graph_model(_load_tree(tree_file))

    related = sum(1 for e in model.edges if e.weight == RELATED_WEIGHT)
    groups = sum(1 for n in model.nodes if n.kind.value == "group")

    table = Table(title="docgraph model")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Nodes", str(len(model.nodes)))
    table.add_row("  groups", str(groups))
    table.add_row("  pages", str(len(model.nodes) - groups))
    table.add_row("Edges", str(len(model.edges)))
    table.add_row("  structural", str(len(model.edges) - related))
    table.add_row("  related", str(related))
    console.print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text query."),
    focus: Optional[str] = typer.Option(None, "--focus", "-f", help="Focused node id."),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum results."),
    tree_file: Optional[Path] = TreeOption,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    debug: bool = DebugOption,
) -> None:
    """Score nodes against QUERY."""
    from .builder import build_graph_model
    from .search import search_nodes

    cfg = _load_settings(debug, search_limit=limit)
    model = build_graph_model(_load_tree(tree_file))
    results = search_nodes(query, model.nodes, focus, limit=cfg.search_limit)

    if as_json:
        typer.echo(json.dumps(
            [{"id": r.id, "title": r.node.title, "score": round(r.score, 4)} for r in results],
            indent=2,
        ))
        return

    if not results:
        console.print(f"[yellow]No matches for[/yellow] {query!r}")
        return

    table = Table(title=f"Results for {query!r}")
    table.add_column("Score", justify="right")
    table.add_column("Title")
    table.add_column("Path", style="dim")
    for r in results:
        table.add_row(f"{r.score:.2f}", r.node.title, r.node.path)
    console.print(table)


@app.command()
def snapshot(
    focus: Optional[str] = typer.Option(None, "--focus", "-f", help="Current page / focused node."),
    query: str = typer.Option("", "--query", "-q", help="Search query."),
    width: Optional[float] = typer.Option(None, "--width", help="Viewport width."),
    height: Optional[float] = typer.Option(None, "--height", help="Viewport height."),
    show_all: bool = typer.Option(False, "--all", help="Include hidden nodes."),
    tree_file: Optional[Path] = TreeOption,
    as_json: bool = typer.Option(False, "--json", help="Print the full snapshot as JSON."),
    debug: bool = DebugOption,
) -> None:
    """Lay out the graph and print the render snapshot."""
    from .session import GraphSession

    cfg = _load_settings(debug, width=width, height=height)
    session = GraphSession(_load_tree(tree_file), current_path=focus, config=cfg)
    session.set_query(query)
    snap = session.snapshot()

    if as_json:
        typer.echo(snap.model_dump_json(indent=2))
        return

    console.print(
        f"[bold]Mode:[/bold] {snap.mode.value}   "
        f"[bold]Focus:[/bold] {snap.focus_id or '-'}   "
        f"[bold]Compact:[/bold] {snap.compact}"
    )
    table = Table()
    table.add_column("Node")
    table.add_column("Role")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    table.add_column("Visible")
    for node in snap.nodes if show_all else snap.visible_nodes:
        table.add_row(
            node.id,
            node.role.value,
            f"{node.position.x:.1f}",
            f"{node.position.y:.1f}",
            "yes" if node.visible else "[dim]no[/dim]",
        )
    console.print(table)
    console.print(f"  {len(snap.visible_edges)} visible edge(s)")


@app.command()
def scan(
    docs_dir: Path = typer.Argument(..., help="Directory of markdown pages."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write tree JSON here."),
    debug: bool = DebugOption,
) -> None:
    """Build a content tree from a markdown directory."""
    from .tree import dump_tree, scan_docs_dir

    _load_settings(debug)
    try:
        tree = scan_docs_dir(docs_dir)
    except DocGraphError as exc:
        _fail(exc)

    text = dump_tree(tree)
    if output is None:
        typer.echo(text)
        return
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]Wrote[/green] {output} ({len(tree)} top-level entries)")


@app.command()
def serve(
    tree_file: Optional[Path] = TreeOption,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address."),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port."),
    debug: bool = DebugOption,
) -> None:
    """Serve the graph HTTP API."""
    from .web.server import start_server

    cfg = _load_settings(debug)
    tree = _load_tree(tree_file)
    console.print(f"[bold cyan]docgraph API:[/bold cyan] http://{host}:{port}/api/graph")
    start_server(tree, cfg, host=host, port=port)


@app.command()
def config(
    key: Optional[str] = typer.Argument(None, help="Config key to get or set."),
    value: Optional[str] = typer.Argument(None, help="New value (omit to read)."),
    path: Optional[Path] = typer.Option(None, "--path", help="Project directory (default: current)."),
) -> None:
    """View or modify .docgraph/config.toml settings."""
    from .config import CONFIG_DIR, CONFIG_FILE, apply_overrides, find_config, load_config, save_config

    root = Path(path).resolve() if path else Path.cwd()
    config_path = find_config(root) or root / CONFIG_DIR / CONFIG_FILE

    try:
        cfg = load_config(config_path)
    except DocGraphError as exc:
        _fail(exc)

    if key is None:
        console.print("[bold]docgraph config:[/bold]")
        for field_name in GraphConfig.model_fields:
            console.print(f"  {field_name} = {getattr(cfg, field_name)!r}")
        return

    if key not in GraphConfig.model_fields:
        console.print(
            f"[red]Error:[/red] Unknown config key [bold]{key}[/bold].\n"
            f"  Valid keys: {', '.join(GraphConfig.model_fields)}"
        )
        raise typer.Exit(code=1)

    if value is None:
        console.print(f"{key} = {getattr(cfg, key)!r}")
        return

    # pydantic coerces "true"/"1"/"2.5" to the field's type.
    try:
        cfg = apply_overrides(cfg, **{key: value})
    except DocGraphError as exc:
        _fail(exc)

    save_config(config_path, cfg)
    console.print(f"[green]Updated:[/green] {key} = {getattr(cfg, key)!r}")


if __name__ == "__main__":
    app()

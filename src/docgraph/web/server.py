"""FastAPI server exposing the documentation graph to a browser host."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from .. import __version__
from ..builder import build_graph_model
from ..config import apply_overrides
from ..errors import DocGraphError
from ..models import GraphConfig, TreeEntry
from ..search import search_nodes
from ..session import GraphSession
from ..tree import DEFAULT_TREE

logger = logging.getLogger(__name__)

app = FastAPI(title="docgraph", version=__version__)

# Set by start_server() before uvicorn starts.
_tree: list[TreeEntry] = list(DEFAULT_TREE)
_config: GraphConfig = GraphConfig()


def configure(tree: list[TreeEntry], config: GraphConfig | None = None) -> None:
    """Point the API at a content tree."""
    global _tree, _config
    _tree = list(tree)
    _config = config or GraphConfig()


@app.get("/api/tree")
async def get_tree() -> JSONResponse:
    return JSONResponse([entry.model_dump() for entry in _tree])


@app.get("/api/search")
async def search(
    q: str = Query(..., description="Free-text query."),
    focus: str | None = Query(None, description="Focused node id for proximity boosts."),
    limit: int | None = Query(None, ge=1),
) -> list[dict]:
    model = build_graph_model(_tree, width=_config.width, height=_config.height)
    results = search_nodes(q, model.nodes, focus, limit=limit or _config.search_limit)
    return [
        {"id": r.id, "title": r.node.title, "path": r.node.path, "score": r.score}
        for r in results
    ]


@app.get("/api/graph")
async def get_graph(
    focus: str | None = Query(None, description="Node to centre on (the current page)."),
    q: str = Query("", description="Search query; switches to search mode."),
    width: float | None = Query(None, ge=0),
    height: float | None = Query(None, ge=0),
) -> JSONResponse:
    """Render snapshot for one (focus, query, size) combination.

    Unlike the in-process session, the endpoint is stateless: every request
    builds a fresh session.
    """
    try:
        config = apply_overrides(_config, width=width, height=height)
    except DocGraphError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    session = GraphSession(_tree, current_path=focus, config=config)
    session.set_query(q)
    snapshot = session.snapshot()
    return JSONResponse(snapshot.model_dump(mode="json"))


@app.get("/api/config")
async def get_config() -> JSONResponse:
    return JSONResponse(_config.model_dump())


# ---------------------------------------------------------------------------
# Server launcher
# ---------------------------------------------------------------------------


def start_server(
    tree: list[TreeEntry],
    config: GraphConfig | None = None,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Serve the graph API with uvicorn (blocks)."""
    import uvicorn

    configure(tree, config)
    logger.info("Serving %d top-level entries on http://%s:%d", len(tree), host, port)
    uvicorn.run(app, host=host, port=port, log_level="debug" if _config.debug_logging else "info")

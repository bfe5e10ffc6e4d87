"""Content-tree sources: JSON files, markdown directories and the built-in tree."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from .errors import TreeLoadError
from .models import TreeEntry

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS: set[str] = {".md", ".mdx"}

# Directories never treated as documentation sections.
SKIP_DIRS: set[str] = {
    ".git", "node_modules", ".next", "dist", "build", "__pycache__", ".cache",
}

_TREE_ADAPTER = TypeAdapter(list[TreeEntry])


def _page(name: str, path: str) -> TreeEntry:
    return TreeEntry(name=name, path=path, type="file")


def _section(name: str, path: str, *children: TreeEntry) -> TreeEntry:
    return TreeEntry(name=name, path=path, type="directory", children=list(children))


# -- Built-in documentation tree ----------------------------------------------

DEFAULT_TREE: list[TreeEntry] = [
    _section(
        "Getting Started", "getting-started",
        _page("Introduction.md", "getting-started/introduction"),
        _page("Quick Start.md", "getting-started/quick-start"),
        _page("Installation.md", "getting-started/installation"),
    ),
    _section(
        "User Guide", "user-guide",
        _page("Basic Usage.md", "user-guide/basic-usage"),
        _page("Advanced Features.md", "user-guide/advanced-features"),
        _page("Configuration.md", "user-guide/configuration"),
        _page("Troubleshooting.md", "user-guide/troubleshooting"),
        _page("Chatbot.md", "user-guide/chatbot"),
    ),
    _section(
        "API Reference", "api-reference",
        _page("Overview.md", "api-reference/overview"),
        _page("Authentication.md", "api-reference/authentication"),
        _page("Endpoints.md", "api-reference/endpoints"),
    ),
    _section(
        "Developer Guides", "developer-guides",
        _page("Code Examples.md", "developer-guides/code-examples"),
        _page("Best Practices.md", "developer-guides/best-practices"),
        _page("Contributing.md", "developer-guides/contributing"),
        _page("Design System.md", "developer-guides/design-system"),
        _page("UI Configuration.md", "developer-guides/ui-configuration"),
        _page("Icon Customization.md", "developer-guides/icon-customization"),
    ),
    _section(
        "Deployment", "deployment",
        _page("Overview.md", "deployment/overview"),
        _page("Production Setup.md", "deployment/production-setup"),
        _section(
            "Platform Guides", "deployment/platforms",
            _page("Cloudflare.md", "deployment/platforms/cloudflare"),
            _page("Vercel.md", "deployment/platforms/vercel"),
            _page("Netlify.md", "deployment/platforms/netlify"),
        ),
    ),
]


# -- JSON ----------------------------------------------------------------------

def parse_tree(data: object) -> list[TreeEntry]:
    """Validate decoded JSON.  Accepts a bare list or ``{"tree": [...]}``."""
    if isinstance(data, dict) and "tree" in data:
        data = data["tree"]
    try:
        return _TREE_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise TreeLoadError(f"Invalid documentation tree: {exc}") from exc


def load_tree(path: Path) -> list[TreeEntry]:
    """Read a content tree from a JSON file."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise TreeLoadError(f"Cannot read {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise TreeLoadError(f"{path} is not valid JSON: {exc}") from exc
    tree = parse_tree(data)
    logger.debug("Loaded %d top-level entries from %s", len(tree), path)
    return tree


def dump_tree(tree: Sequence[TreeEntry], indent: int | None = 2) -> str:
    return json.dumps(
        [entry.model_dump() for entry in tree], indent=indent
    )


# -- Markdown directories ------------------------------------------------------

def titleize(slug: str) -> str:
    """``"quick-start"`` -> ``"Quick Start"``."""
    words = slug.replace("_", " ").replace("-", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def scan_docs_dir(root: Path) -> list[TreeEntry]:
    """Build a content tree from a directory of markdown files.

    Sections are directories holding at least one markdown page.  Paths are
    relative to *root*, use forward slashes and drop the file extension.
    Pages are listed before subsections, each group sorted by name.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise TreeLoadError(f"{root} is not a directory")
    return _scan(root, root)


def _scan(directory: Path, root: Path) -> list[TreeEntry]:
    pages: list[TreeEntry] = []
    sections: list[TreeEntry] = []

    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name.lower())

    for entry in entries:
        if entry.name.startswith("."):
            continue
        full = Path(entry.path)
        rel = full.relative_to(root).as_posix()

        if entry.is_dir():
            if entry.name in SKIP_DIRS:
                continue
            children = _scan(full, root)
            if not children:
                continue
            sections.append(TreeEntry(
                name=titleize(entry.name), path=rel, type="directory", children=children,
            ))
        elif full.suffix.lower() in MARKDOWN_EXTENSIONS:
            stem = full.stem
            pages.append(TreeEntry(
                name=f"{titleize(stem)}{full.suffix.lower()}",
                path=rel[: -len(full.suffix)],
                type="file",
            ))

    return pages + sections

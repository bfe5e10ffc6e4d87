"""Loading and saving ``.docgraph/config.toml``."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from .errors import ConfigError
from .models import GraphConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = ".docgraph"
CONFIG_FILE = "config.toml"


def find_config(start: Path | None = None) -> Path | None:
    """Search *start* and its parents for ``.docgraph/config.toml``."""
    current = (start or Path.cwd()).resolve()
    for d in [current, *current.parents]:
        candidate = d / CONFIG_DIR / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None) -> GraphConfig:
    """Read *path*, or return defaults when there is no config file."""
    if path is None or not path.is_file():
        return GraphConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    # Settings may live at the top level or under [graph].
    data = data.get("graph", data)
    try:
        cfg = GraphConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc

    logger.debug("Loaded config from %s", path)
    return cfg


def save_config(path: Path, cfg: GraphConfig) -> None:
    """Write *cfg* as a flat TOML table, creating the directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["[graph]"]
    for name, value in cfg.model_dump().items():
        # JSON scalars (true/false, numbers, quoted strings) are valid TOML.
        lines.append(f"{name} = {json.dumps(value)}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def apply_overrides(cfg: GraphConfig, **overrides: object) -> GraphConfig:
    """Return a copy of *cfg* with every non-None override applied.

    Precedence: CLI flag > config.toml > default.
    """
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return cfg
    try:
        return GraphConfig.model_validate({**cfg.model_dump(), **update})
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def configure_logging(debug: bool = False) -> None:
    """Route logs through rich on stderr so stdout stays machine-readable."""
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )

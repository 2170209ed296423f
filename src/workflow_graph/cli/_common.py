"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import EngineConfig, load_config

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    mode: Optional[str] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
) -> EngineConfig:
    """Build engine config from CLI options."""
    overrides = {}
    if mode is not None:
        overrides["mode"] = mode
    if width is not None:
        overrides["canvas_width"] = width
    if height is not None:
        overrides["canvas_height"] = height
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    return load_config(config_file=config, **overrides)

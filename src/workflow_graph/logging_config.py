"""
Logging configuration for workflow-graph.

Every module logs through a child of the ``workflow_graph`` logger:

    workflow_graph.engine            stage progress, fallbacks, partial results
    workflow_graph.scanning.*        skipped file records, large-repo selection
    workflow_graph.graph.*           resolution misses, dropped edges, bridges
    workflow_graph.layout.*          level overflow, unsettled overlap passes

Recoverable problems are logged at WARNING with their ``[WGxxx]`` code at
the start of the message; per-step detail is DEBUG. ``analyze()`` and the
CLI call ``setup_logging`` once per run; the library itself never does.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "workflow_graph"


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route ``workflow_graph.*`` records to a rich stderr handler.

    stdout stays free for ``--format json`` output, so the console always
    writes to stderr. Markup is off because messages carry raw file paths
    and import specifiers, and ``[WG200]`` would otherwise be read as a tag.

    Args:
        verbose: DEBUG level, with source locations and local variables in tracebacks
        quiet: ERROR level only; the engine's recoverable warnings are hidden
        log_file: Optional file that receives the same records in plain text

    Returns:
        The ``workflow_graph`` logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    # basicConfig is a no-op once the root logger has handlers; the
    # package level still follows the latest call
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for one module, always inside the ``workflow_graph`` tree.

    Args:
        name: Usually ``__name__`` (e.g. 'workflow_graph.graph.resolver');
              a bare name such as 'resolver' is prefixed with the package.
              None returns the package logger itself.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)

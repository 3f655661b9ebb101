"""Logging setup for dockstart.

User-facing output goes through rich consoles in the CLI. This module covers
the diagnostic side: every module asks for a logger in the ``dockstart``
namespace, which writes to stderr at WARNING unless debugging is enabled.

Enable debug output with ``dockstart --debug`` or ``DOCKSTART_DEBUG=1``.
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import DEBUG_ENV

ROOT_LOGGER = "dockstart"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def debug_requested(env: dict[str, str] | None = None) -> bool:
    """Return True if the debug environment variable is set to a truthy value."""
    source = os.environ if env is None else env
    return source.get(DEBUG_ENV, "").strip().lower() in ("1", "true", "yes", "on")


def _formatter(debug: bool) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if debug else LOG_FORMAT, datefmt=DATE_FORMAT)


def _configure() -> None:
    global _configured
    if _configured:
        return

    debug = debug_requested()
    level = logging.DEBUG if debug else logging.WARNING
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)

    # Re-imports (e.g. in tests) must not stack handlers
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(_formatter(debug))
        root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the dockstart namespace.

    Args:
        name: Module name, typically ``__name__``. Names outside the
            namespace are prefixed with ``dockstart.``.
    """
    _configure()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_debug(enabled: bool = True) -> None:
    """Switch the dockstart loggers between DEBUG and WARNING."""
    _configure()
    level = logging.DEBUG if enabled else logging.WARNING
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
        handler.setFormatter(_formatter(enabled))

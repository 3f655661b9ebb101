"""CLI utilities for dockstart.

Console setup, Docker availability check and error reporting.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import NoReturn

from rich.console import Console
from rich.markup import escape

from .. import docker
from ..errors import DockstartError

# soft_wrap keeps long host paths on one line
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def check_docker(env: Mapping[str, str] | None = None) -> bool:
    """Check if Docker is available and running."""
    return docker.check_docker_status(env)


def fail(error: DockstartError | str) -> NoReturn:
    """Print an error message and exit with status 1."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)

"""Host path utilities.

Resolves the user-supplied paths (volume root, config file location) against
the working directory and the home directory. Everything here is pure string
composition except ``resolve_volume_root``, which reads the supplied
environment mapping.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from .constants import VOLUME_ROOT_ENV
from .errors import MissingVolumeRootError


def strip_trailing_slash(path: str) -> str:
    """Remove trailing slashes from a path.

    The filesystem root is kept as ``/``.

    Examples:
        >>> strip_trailing_slash("/etc/nginx/")
        '/etc/nginx'
        >>> strip_trailing_slash("/")
        '/'
    """
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def join_under(root: str, *parts: str) -> str:
    """Join path segments below ``root``.

    Unlike ``os.path.join``, a leading slash on a segment does not discard
    what came before it: ``join_under("/data", "/conf")`` is ``/data/conf``.
    """
    segments = [p.lstrip("/") for p in parts if p]
    return os.path.normpath(os.path.join(root, *segments))


def resolve_path(path: str, cwd: str | Path, home: str | Path | None = None) -> str:
    """Resolve a home-relative, absolute or relative path to an absolute one.

    Args:
        path: Path as written by the user (``~/vol``, ``/srv/vol``, ``vol``).
        cwd: Directory relative paths are joined onto.
        home: Home directory; defaults to the current user's.

    Returns:
        Absolute path string. Absolute input is returned unchanged.
    """
    if path.startswith("~"):
        home_dir = str(home) if home is not None else str(Path.home())
        return join_under(home_dir, path[1:])
    if os.path.isabs(path):
        return path
    return join_under(str(cwd), path)


def resolve_volume_root(
    volume_root: str | None,
    cwd: str | Path,
    env: Mapping[str, str] | None = None,
) -> str:
    """Resolve the volume root from the explicit value or the environment.

    Raises:
        MissingVolumeRootError: If neither source provides a value.
    """
    value = volume_root or (env or {}).get(VOLUME_ROOT_ENV)
    if not value:
        raise MissingVolumeRootError(
            f"Volume root is not set. Pass --volume-root or set {VOLUME_ROOT_ENV}."
        )
    return resolve_path(value, cwd)

"""Mount spec resolution.

Turns ``source:destination`` entries from startup.yml into concrete
host/container path pairs below the volume root.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import MalformedMountError
from .paths import join_under, strip_trailing_slash

if TYPE_CHECKING:
    from .config import StartupConfig


@dataclass(frozen=True)
class PathMapping:
    """A resolved mount: where it lives on the host and inside the container."""

    host_path: str
    container_path: str

    def as_volume(self) -> str:
        """Return the ``-v`` value for docker run."""
        return f"{self.host_path}:{self.container_path}"


def parse_mount_spec(spec: str) -> tuple[str, str]:
    """Split a mount spec into (source, destination).

    Raises:
        MalformedMountError: Unless the spec has exactly two non-empty parts.
    """
    parts = spec.split(":")
    if len(parts) != 2 or not all(parts):
        raise MalformedMountError(spec)
    return parts[0], parts[1]


def get_sub_directory(config: StartupConfig) -> str | None:
    """Directory inserted between volume root and mount sources.

    An explicit volumeSubDirectory wins, then the container name.
    """
    return config.volume_sub_directory or config.container_name or None


def map_volumes(
    specs: Iterable[str],
    volume_root: str,
    sub_directory: str | None = None,
) -> list[PathMapping]:
    """Resolve mount specs to path mappings, preserving their order.

    Args:
        specs: ``source:destination`` strings.
        volume_root: Absolute host directory the sources live under.
        sub_directory: Optional segment between volume root and source.

    Raises:
        MalformedMountError: On the first spec that does not parse. No
            partial result is returned.
    """
    mappings = []
    for spec in specs:
        src, dest = parse_mount_spec(spec)
        if sub_directory:
            host = join_under(volume_root, sub_directory, src)
        else:
            host = join_under(volume_root, src)
        mappings.append(PathMapping(strip_trailing_slash(host), strip_trailing_slash(dest)))
    return mappings

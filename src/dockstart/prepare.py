"""Host-side preparation of config file mounts.

Config files listed under configFileMount must exist on the host before the
container is started with them bind-mounted. Missing ones are copied out of
the image.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import load_config
from .docker import extract_from_image
from .errors import ValidationError
from .logging import get_logger
from .mounts import PathMapping, get_sub_directory, map_volumes
from .paths import resolve_volume_root
from .run_config import RunOptions

logger = get_logger(__name__)


class PrepareStatus(str, Enum):
    """Outcome of preparing a single mount."""

    NEW = "new"  # Copied from the image
    EXISTING = "exist"  # Already on the host, left untouched


@dataclass(frozen=True)
class PrepareResult:
    status: PrepareStatus
    file_path: str


def prepare_mappings(
    mappings: Iterable[PathMapping],
    image_name: str,
    cwd: str | Path,
    *,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> list[PrepareResult]:
    """Make sure every mapped host path exists, extracting missing ones.

    Mappings are handled one at a time, in order. Existing host paths are
    never overwritten. A failed extraction stops the run; files extracted
    before it stay on disk.

    Raises:
        ExtractionError: If copying from the image fails.
    """
    results = []
    for mapping in mappings:
        host_path = Path(mapping.host_path)
        if host_path.exists():
            logger.debug("Mount already present: %s", host_path)
            results.append(PrepareResult(PrepareStatus.EXISTING, mapping.host_path))
            continue

        host_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Extracting %s from %s to %s", mapping.container_path, image_name, host_path)
        extract_from_image(image_name, mapping, cwd=cwd, env=env, timeout=timeout)
        results.append(PrepareResult(PrepareStatus.NEW, mapping.host_path))
    return results


def needs_extraction(mappings: Iterable[PathMapping]) -> bool:
    """Whether any mapped host path is missing."""
    return any(not Path(mapping.host_path).exists() for mapping in mappings)


def prepare_mounts(
    config_file_mounts: Iterable[str],
    volume_root: str,
    sub_directory: str | None,
    image_name: str,
    cwd: str | Path,
    *,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> list[PrepareResult]:
    """Make sure every config file mount exists on the host.

    Raises:
        MalformedMountError: If any mount spec is malformed (before any I/O).
        ExtractionError: If copying from the image fails.
    """
    mappings = map_volumes(config_file_mounts, volume_root, sub_directory)
    return prepare_mappings(mappings, image_name, cwd, env=env, timeout=timeout)


def load_mappings(options: RunOptions) -> list[PathMapping]:
    """Load the config and map its config file mounts onto the volume root.

    Raises:
        ValidationError: If no image name was given.
        ConfigNotFoundError: If the config file is missing.
        MissingVolumeRootError: If no volume root is available.
        MalformedMountError: If any mount spec is malformed.
    """
    if not options.image_name:
        raise ValidationError("prepare requires an image name")

    config = load_config(options.cwd, options.config_file)
    volume_root = resolve_volume_root(options.volume_root, options.cwd, options.env)
    return map_volumes(config.config_file_mount, volume_root, get_sub_directory(config))


def prepare(options: RunOptions) -> list[PrepareResult]:
    """Prepare the config file mounts declared in the startup config.

    Raises:
        ConfigNotFoundError: If the config file is missing.
        MissingVolumeRootError: If no volume root is available.
        ExtractionError: If copying from the image fails.
    """
    mappings = load_mappings(options)
    return prepare_mappings(
        mappings,
        options.image_name,
        options.cwd,
        env=options.env,
        timeout=options.timeout,
    )

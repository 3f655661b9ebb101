"""Container startup from the startup config."""

from __future__ import annotations

from .config import StartupConfig, load_config
from .docker import run_container
from .errors import ValidationError
from .generator import get_docker_run_cmd
from .logging import get_logger
from .paths import resolve_volume_root
from .run_config import RunOptions

logger = get_logger(__name__)


def load_run_cmd(options: RunOptions) -> tuple[StartupConfig, list[str]]:
    """Load the config and build the docker run argv for ``options``.

    Raises:
        ValidationError: If no image name was given.
        ConfigNotFoundError: If the config file is missing.
        MissingVolumeRootError: If no volume root is available.
    """
    if not options.image_name:
        raise ValidationError("run requires an image name")

    config = load_config(options.cwd, options.config_file)
    volume_root = resolve_volume_root(options.volume_root, options.cwd, options.env)
    return config, get_docker_run_cmd(config, volume_root, options.image_name, options.env)


def startup(options: RunOptions) -> str:
    """Start the container described by the startup config.

    Returns:
        Standard output of ``docker run`` (the container ID when detached).

    Raises:
        ConfigNotFoundError: If the config file is missing.
        MissingVolumeRootError: If no volume root is available.
        ContainerError: If docker run exits with a non-zero status.
    """
    config, cmd = load_run_cmd(options)
    logger.debug("Starting container %s from %s", config.container_name or "-", options.image_name)
    return run_container(cmd, cwd=options.cwd, env=options.env, timeout=options.timeout)

"""Docker operations for dockstart.

All docker subprocesses are issued from here. Commands are argv lists (no
shell). Callers pass the working directory and environment explicitly.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from typing import TYPE_CHECKING

from .constants import COPY_MOUNT_POINT, DOCKER_CHECK_TIMEOUT, EXTRACT_SHELL
from .errors import (
    ContainerError,
    DockerNotFoundError,
    DockerTimeoutError,
    ExtractionError,
)
from .logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from .mounts import PathMapping


def safe_docker_run(
    cmd: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a Docker command with consistent error handling.

    Args:
        cmd: Command to run (should start with 'docker').
        cwd: Working directory for the process.
        env: Environment for the process. None inherits the current one.
        timeout: Seconds to wait; None blocks until the process exits.
        capture_output: Capture stdout/stderr if True.

    Returns:
        CompletedProcess with command result. A non-zero exit is not an error
        at this level.

    Raises:
        DockerNotFoundError: If docker command is not found.
        DockerTimeoutError: If the timeout expires.
    """
    cmd_str = shlex.join(cmd)
    logger.debug("Running Docker command: %s", cmd_str)
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            env=dict(env) if env is not None else None,
            capture_output=capture_output,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        logger.error("Docker not found in PATH: %s", cmd_str)
        raise DockerNotFoundError(f"Docker not found in PATH. Command: {cmd_str}") from e
    except subprocess.TimeoutExpired as e:
        logger.error("Docker command timed out after %ss: %s", timeout, cmd_str)
        raise DockerTimeoutError(
            f"Docker command timed out after {timeout}s. Command: {cmd_str}"
        ) from e

    logger.debug("Docker command completed: exit=%d", result.returncode)
    return result


def _failure_detail(result: subprocess.CompletedProcess[str]) -> str:
    detail = (result.stderr or "").strip()
    return detail or f"exit code {result.returncode}"


def check_docker_status(env: Mapping[str, str] | None = None) -> bool:
    """Check if Docker daemon is responsive.

    Returns:
        True if Docker is running and responsive, False otherwise.
    """
    try:
        result = safe_docker_run(["docker", "info"], env=env, timeout=DOCKER_CHECK_TIMEOUT)
    except (DockerNotFoundError, DockerTimeoutError):
        return False
    return result.returncode == 0


def get_extract_cmd(image_name: str, mapping: PathMapping) -> list[str]:
    """Build the command that copies ``mapping.container_path`` out of an image.

    The host path's parent directory is bind-mounted into a throwaway
    container and the container path is copied into it under the host
    path's base name. The copy only runs if the source exists in the image.
    """
    parent = os.path.dirname(mapping.host_path)
    target = f"{COPY_MOUNT_POINT}/{os.path.basename(mapping.host_path)}"
    source = shlex.quote(mapping.container_path)
    script = f"stat {source} > /dev/null && cp -r {source} {shlex.quote(target)}"
    return [
        "docker",
        "run",
        "--rm",
        "-v",
        f"{parent}:{COPY_MOUNT_POINT}",
        image_name,
        EXTRACT_SHELL,
        "-c",
        script,
    ]


def extract_from_image(
    image_name: str,
    mapping: PathMapping,
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> None:
    """Copy a path from ``image_name`` to ``mapping.host_path``.

    Raises:
        ExtractionError: If the path is missing in the image or the copy fails.
    """
    result = safe_docker_run(
        get_extract_cmd(image_name, mapping), cwd=cwd, env=env, timeout=timeout
    )
    if result.returncode != 0:
        logger.error(
            "Extraction of %s from %s failed: exit=%d",
            mapping.container_path,
            image_name,
            result.returncode,
        )
        raise ExtractionError(
            f"Failed to copy {mapping.container_path} from image {image_name}: "
            f"{_failure_detail(result)}"
        )


def run_container(
    cmd: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> str:
    """Execute a docker run command and return its standard output.

    Raises:
        ContainerError: If docker exits with a non-zero status.
    """
    result = safe_docker_run(cmd, cwd=cwd, env=env, timeout=timeout)
    if result.returncode != 0:
        logger.error("docker run failed: exit=%d", result.returncode)
        raise ContainerError(f"docker run failed: {_failure_detail(result)}")
    return result.stdout

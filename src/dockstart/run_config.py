"""Run options dataclass for dockstart.

Bundles the per-invocation context (directory, volume root, config file,
image, environment) shared by the prepare and run operations.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .constants import DEFAULT_CONFIG_FILE


@dataclass(frozen=True)
class RunOptions:
    """Options for a prepare or run operation.

    ``env`` is the environment handed to docker subprocesses. None means the
    subprocess inherits the current process environment.
    """

    cwd: str = "."
    volume_root: str | None = None
    config_file: str = DEFAULT_CONFIG_FILE
    image_name: str | None = None
    env: Mapping[str, str] | None = field(default=None, hash=False, compare=False)
    timeout: float | None = None

    @classmethod
    def from_cli(
        cls,
        *,
        image: str | None = None,
        config_file: str | None = None,
        volume_root: str | None = None,
        cwd: str | None = None,
        timeout: float | None = None,
    ) -> RunOptions:
        """Create RunOptions from CLI arguments.

        Captures the current directory and a snapshot of the process
        environment.
        """
        return cls(
            cwd=cwd or os.getcwd(),
            volume_root=volume_root,
            config_file=config_file or DEFAULT_CONFIG_FILE,
            image_name=image,
            env=dict(os.environ),
            timeout=timeout,
        )

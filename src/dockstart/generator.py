"""docker run command generation.

Flag order is fixed: daemon, name, ports, config-file volumes, directory
volumes, then the free-form otherArguments.
"""

from __future__ import annotations

import os
import re
import shlex
from collections.abc import Mapping

from .config import StartupConfig
from .errors import ConfigError
from .mounts import get_sub_directory, map_volumes

# Single-quoted spans and escapes are matched first so they pass through unchanged
_VARIABLE_RE = re.compile(
    r"'[^']*'|\\.|\$\{(?P<braced>[A-Za-z_]\w*)\}|\$(?P<plain>[A-Za-z_]\w*)"
)


def _flag_tokens(config: StartupConfig, volume_root: str) -> list[str]:
    """Flags derived from the config, excluding otherArguments."""
    tokens: list[str] = []
    if config.daemon:
        tokens.append("-d")
    if config.container_name:
        tokens.extend(["--name", config.container_name])
    for port in config.port_map:
        tokens.extend(["-p", port])

    sub_directory = get_sub_directory(config)
    # A malformed mount in either list fails the whole build
    file_mappings = map_volumes(config.config_file_mount, volume_root, sub_directory)
    dir_mappings = map_volumes(config.directory_mount, volume_root, sub_directory)
    for mapping in (*file_mappings, *dir_mappings):
        tokens.extend(["-v", mapping.as_volume()])
    return tokens


def build_run_arguments(config: StartupConfig, volume_root: str) -> str:
    """Build the argument string placed between ``docker run`` and the image.

    Every token is preceded by a space and the string ends with a trailing
    space, so ``"docker run" + args + image`` is a complete command.
    otherArguments is appended verbatim.

    Example:
        >>> build_run_arguments(StartupConfig(container_name="app"), "/data")
        ' -d --name app '
    """
    args = "".join(f" {token}" for token in _flag_tokens(config, volume_root))
    if config.other_arguments:
        args += " " + config.other_arguments
    return args + " "


def get_docker_run_command(config: StartupConfig, volume_root: str, image_name: str) -> str:
    """Get the full ``docker run`` command line as a single string."""
    return "docker run" + build_run_arguments(config, volume_root) + image_name


def expand_variables(text: str, env: Mapping[str, str]) -> str:
    """Expand ``$NAME`` and ``${NAME}`` from ``env`` as a POSIX shell would.

    Unset variables expand to an empty string. Single-quoted text and
    backslash-escaped characters are left untouched.

    Example:
        >>> expand_variables("-e TZ=$TZ -e X='$HOME'", {"TZ": "UTC"})
        "-e TZ=UTC -e X='$HOME'"
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group("braced") or match.group("plain")
        if name is None:
            return match.group(0)
        return env.get(name, "")

    return _VARIABLE_RE.sub(_replace, text)


def get_docker_run_cmd(
    config: StartupConfig,
    volume_root: str,
    image_name: str,
    env: Mapping[str, str] | None = None,
) -> list[str]:
    """Get the ``docker run`` argv that is actually executed.

    Same flags as ``get_docker_run_command``. otherArguments has its
    variables expanded from ``env`` (the current environment when None) and
    is then split into words with shell quoting rules.
    """
    cmd = ["docker", "run", *_flag_tokens(config, volume_root)]
    if config.other_arguments:
        expanded = expand_variables(config.other_arguments, os.environ if env is None else env)
        try:
            cmd.extend(shlex.split(expanded))
        except ValueError as e:
            raise ConfigError(f"otherArguments could not be parsed: {e}") from e
    cmd.append(image_name)
    return cmd

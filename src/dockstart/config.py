"""startup.yml loading and generation."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_CONFIG_FILE
from .errors import ConfigError, ConfigExistsError, ConfigNotFoundError
from .logging import get_logger

logger = get_logger(__name__)

# Written by `dockstart init`. Every recognized key is listed.
DEFAULT_TEMPLATE = """\
# dockstart configuration
# Generated by `dockstart init`; used by `dockstart prepare` and `dockstart run`.

# Container name (--name). Also the default volume sub-directory.
# containerName: my-app

# Run detached (-d). Defaults to true.
daemon: true

# Sub-directory under the volume root for this container's mounts.
# Defaults to containerName when unset.
# volumeSubDirectory: my-app

# Port mappings (-p host:container).
portMap: []
#  - "8080:80"

# Config files copied out of the image by `dockstart prepare`, then mounted.
# Format: "<path under volume root>:<path in container>"
configFileMount: []
#  - "conf/nginx.conf:/etc/nginx/nginx.conf"

# Data directories mounted into the container.
directoryMount: []
#  - "data:/var/lib/app"

# Extra docker run arguments, appended as-is.
# otherArguments: --restart unless-stopped
"""

# Document key -> StartupConfig field
_STRING_KEYS = {
    "containerName": "container_name",
    "volumeSubDirectory": "volume_sub_directory",
    "otherArguments": "other_arguments",
}
_LIST_KEYS = {
    "directoryMount": "directory_mount",
    "configFileMount": "config_file_mount",
    "portMap": "port_map",
}
_DAEMON_KEYS = ("daemon", "deamon")  # "deamon" kept for files written by older releases

_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"


class ConfigLoader(yaml.SafeLoader):
    """SafeLoader without the YAML 1.1 base-60 number forms.

    Mount and port entries such as 22:22 or 3000:30 stay strings instead of
    being read as sexagesimal integers.
    """


ConfigLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_INT_TAG, _FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ConfigLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
ConfigLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


@dataclass(frozen=True)
class StartupConfig:
    """Parsed startup.yml. Absent keys take the defaults below."""

    container_name: str | None = None
    daemon: bool = True
    directory_mount: tuple[str, ...] = ()
    config_file_mount: tuple[str, ...] = ()
    port_map: tuple[str, ...] = ()
    volume_sub_directory: str | None = None
    other_arguments: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StartupConfig:
        """Build a config from a decoded YAML document.

        Unknown keys are ignored.

        Raises:
            ConfigError: If a recognized key holds a value of the wrong type.
        """
        fields: dict[str, Any] = {}

        for key, field_name in _STRING_KEYS.items():
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise ConfigError(f"{key} must be a string, got {type(value).__name__}")
            fields[field_name] = str(value)

        for key, field_name in _LIST_KEYS.items():
            value = data.get(key)
            if value is None:
                continue
            fields[field_name] = _string_list(key, value)

        for key in _DAEMON_KEYS:
            if key in data and data[key] is not None:
                if not isinstance(data[key], bool):
                    raise ConfigError(f"{key} must be true or false, got {data[key]!r}")
                fields["daemon"] = data[key]
                break

        known = set(_STRING_KEYS) | set(_LIST_KEYS) | set(_DAEMON_KEYS)
        for key in data:
            if key not in known:
                logger.debug("Ignoring unknown config key: %s", key)

        return cls(**fields)


def _string_list(key: str, value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{key} entries must be strings, got {item!r}")
    return tuple(value)


def get_config_path(cwd: str | Path, config_file: str | None = None) -> Path:
    """Get the path of the startup config inside ``cwd``."""
    return Path(cwd) / (config_file or DEFAULT_CONFIG_FILE)


def parse_config(text: str, source: str = DEFAULT_CONFIG_FILE) -> StartupConfig:
    """Parse startup.yml text.

    Raises:
        ConfigError: On YAML syntax errors or a non-mapping document.
    """
    try:
        data = yaml.load(text, Loader=ConfigLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {source}: {e}") from e

    if data is None:
        return StartupConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source} must contain a mapping, got {type(data).__name__}")
    return StartupConfig.from_mapping(data)


def load_config(cwd: str | Path, config_file: str | None = None) -> StartupConfig:
    """Load the startup config from ``cwd``.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed.
    """
    name = config_file or DEFAULT_CONFIG_FILE
    path = get_config_path(cwd, name)
    if not path.is_file():
        raise ConfigNotFoundError(f"Could not find {name}")

    logger.debug("Loading config: %s", path)
    return parse_config(path.read_text(encoding="utf-8"), name)


def init_config(cwd: str | Path, config_file: str | None = None) -> Path:
    """Write the default template to ``cwd`` and return its path.

    Raises:
        ConfigExistsError: If the file is already present.
    """
    name = config_file or DEFAULT_CONFIG_FILE
    path = get_config_path(cwd, name)
    if path.exists():
        raise ConfigExistsError(f"{name} already exists")

    path.write_text(DEFAULT_TEMPLATE, encoding="utf-8")
    logger.debug("Created config: %s", path)
    return path

"""Unified exception hierarchy for dockstart.

All custom exceptions inherit from DockstartError for consistent error handling.
The CLI catches DockstartError and prints a single user-facing message.

Dependency direction:
    This module has NO internal dependencies (leaf module).
    It may be imported by: all other dockstart modules.
    It should NOT import from any other dockstart modules.
"""

from __future__ import annotations


class DockstartError(Exception):
    """Base exception for all dockstart errors."""


class ConfigError(DockstartError):
    """Configuration-related errors.

    Examples:
        - YAML syntax errors in startup.yml
        - Values of the wrong type (e.g. portMap not a list)
    """


class ConfigNotFoundError(ConfigError):
    """Raised when the startup config file does not exist."""


class ConfigExistsError(ConfigError):
    """Raised by init when the startup config file is already present."""


class MalformedMountError(ConfigError):
    """Raised when a mount spec is not of the form ``source:destination``."""

    def __init__(self, spec: str) -> None:
        super().__init__(f"Malformed mount '{spec}': expected 'source:destination'")
        self.spec = spec


class MissingVolumeRootError(ConfigError):
    """Raised when neither --volume-root nor VOLUME_ROOT is set."""


class DockerError(DockstartError):
    """Docker operation errors.

    Base class for all Docker-related exceptions.
    """


class DockerNotFoundError(DockerError):
    """Raised when Docker is not installed or not in PATH."""


class DockerTimeoutError(DockerError):
    """Raised when a Docker operation exceeds the caller's timeout."""


class DockerNotRunningError(DockerError):
    """Raised when Docker daemon is not running."""


class ExtractionError(DockerError):
    """Raised when copying a path out of an image fails."""


class ContainerError(DockerError):
    """Raised when the docker run command fails."""


class ValidationError(DockstartError):
    """Input validation errors.

    Examples:
        - Empty image name passed to prepare or run
    """

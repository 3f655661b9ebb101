"""Constants module for dockstart (SSOT)."""

from __future__ import annotations

# === Config file ===
DEFAULT_CONFIG_FILE = "startup.yml"

# === Environment variables ===
VOLUME_ROOT_ENV = "VOLUME_ROOT"
DEBUG_ENV = "DOCKSTART_DEBUG"

# === Docker ===
DOCKER_CHECK_TIMEOUT = 30  # docker info
COPY_MOUNT_POINT = "/copy_data_tmp"  # Parent dir mount inside the extraction container
EXTRACT_SHELL = "bash"

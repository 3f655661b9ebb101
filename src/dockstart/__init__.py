"""dockstart - declarative startup configuration for docker containers."""

from __future__ import annotations

__version__ = "0.3.0"

"""Distribution name and version, read from the installed package metadata."""

from __future__ import annotations

from importlib.metadata import metadata, version

__all__ = ("__project__", "__version__")

__project__ = metadata("litestar-sharing")["Name"]
"""Name of the distribution."""
__version__ = version(__project__)
"""Installed version of the distribution."""

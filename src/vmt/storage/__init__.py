"""Storage layer for VMT."""

from .vessels_client import VesselsClient

__all__ = ["VesselsClient"]

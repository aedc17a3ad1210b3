"""VMT - management console for the vessel registry."""

__version__ = "0.1.0"

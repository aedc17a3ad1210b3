"""Processing layer for VMT."""

from .reconciler import ConsoleMessages, ResultReconciler

__all__ = ["ConsoleMessages", "ResultReconciler"]

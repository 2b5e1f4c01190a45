"""Terminal user interface."""

from .operator_console import OperatorConsole

__all__ = ["OperatorConsole"]

"""Tools for Yuchi."""

from .base import CANCELLED, Confirm, ShellCommandTool, Tool

__all__ = ["CANCELLED", "Confirm", "ShellCommandTool", "Tool"]

"""Yuchi - a command-line assistant powered by ShapesAI."""

__version__ = "0.2.0"

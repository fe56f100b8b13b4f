"""LLM providers for Yuchi."""

from .base import Provider, ToolChoice
from .shapes import STATUS_MESSAGES, ShapesProvider

__all__ = [
    "Provider",
    "ToolChoice",
    "ShapesProvider",
    "STATUS_MESSAGES",
]

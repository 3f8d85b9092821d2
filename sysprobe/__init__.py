"""Sysprobe - Query system and hardware information from the command line."""

__version__ = "0.2.0"

from .core.executor import CommandExecutor
from .core.template import TemplateEngine

__all__ = ["CommandExecutor", "TemplateEngine"]

"""Core query engine for sysprobe."""

from .errors import (
    SysprobeError,
    TargetNotFound,
    UnknownField,
    UnsupportedForTemplate,
    UnterminatedPlaceholder,
)
from .executor import CommandExecutor
from .queries import Category, parse_field, parse_query
from .template import TemplateEngine

__all__ = [
    "Category",
    "CommandExecutor",
    "SysprobeError",
    "TargetNotFound",
    "TemplateEngine",
    "UnknownField",
    "UnsupportedForTemplate",
    "UnterminatedPlaceholder",
    "parse_field",
    "parse_query",
]

"""Template formatting: substitute `%field%` placeholders with rendered values."""

import logging
import re
from typing import Callable, Optional

from .errors import UnsupportedForTemplate, UnterminatedPlaceholder
from .executor import CommandExecutor
from .queries import Category, parse_query

logger = logging.getLogger(__name__)

# `%` toggles between literal text and a placeholder; `%%` is an empty placeholder
PLACEHOLDER_RE = re.compile(r"%([^%]*)%")

FormatContext = dict[str, str]


def extract_placeholders(template: str) -> list[str]:
    """
    Return the raw placeholder texts of a template, in order (may repeat).

    Args:
        template: Template string, e.g. "CPU: %usage%%%"

    Returns:
        Placeholder texts as written, "" for each `%%`

    Raises:
        UnterminatedPlaceholder: If a `%` is never closed

    Examples:
        >>> extract_placeholders("CPU: %usage%%% Mem: %total%")
        ['usage', '', 'total']
    """
    if template.count("%") % 2:
        raise UnterminatedPlaceholder(template, template.rindex("%"))
    return PLACEHOLDER_RE.findall(template)


def unique_specifiers(placeholders: list[str]) -> list[str]:
    """Unique non-empty placeholder texts in first-occurrence order."""
    return [text for text in dict.fromkeys(placeholders) if text]


class TemplateEngine:
    """
    Format templates against the fields of one category.

    Each unique placeholder is resolved exactly once, and all of them are
    rendered in a single executor run, so provider refreshes happen at most
    once per formatting pass. Any failure aborts before substitution.
    """

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def _build_context(
        self,
        category: Category,
        placeholders: list[str],
        name: Optional[str] = None,
    ) -> FormatContext:
        """
        Resolve placeholder texts into a format context.

        Args:
            category: Category the placeholders are scoped to
            placeholders: Raw placeholder texts (duplicates and "" allowed)
            name: Entity name for targeted categories

        Returns:
            Mapping from placeholder text (as written) to its rendered value,
            with "" mapped to "%"
        """
        specifiers = unique_specifiers(placeholders)
        bound = self.executor.bind(category, name)
        queries = [parse_query(category, text) for text in specifiers]

        logger.debug(
            "Resolving %d unique specifier(s) out of %d",
            len(specifiers),
            len(placeholders),
        )
        values = bound.run([query.field for query in queries])

        context: FormatContext = {"": "%"}
        context.update(zip(specifiers, values))
        return context

    def format(
        self, category: Category, template: str, name: Optional[str] = None
    ) -> str:
        """
        Substitute every placeholder of a template.

        Raises:
            UnsupportedForTemplate: For list-* categories
            UnterminatedPlaceholder: If a `%` is never closed
            UnknownField: If a placeholder names no field of the category
            TargetNotFound: If the named entity does not exist
        """
        if category.is_listing:
            raise UnsupportedForTemplate(category)

        placeholders = extract_placeholders(template)
        context = self._build_context(category, placeholders, name)
        return PLACEHOLDER_RE.sub(_lookup(context), template)


def _lookup(context: FormatContext) -> Callable[[re.Match], str]:
    def replace(match: re.Match) -> str:
        return context[match.group(1)]

    return replace

"""Ignore-list selectors.

This module decides which tables (and synonyms) are left out of a dump.
Every ignore entry becomes a selector: literal names compare by equality
and compiled patterns by search, both against the name with the configured
prefix/suffix removed. The bookkeeping table ``schema_migrations`` is always
ignored.

Selectors are pure, side-effect-free objects so the same filter can be
reused by the dumpers, the CLI preview command and tests.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable

from oradump.core.naming import NamingConfig

SCHEMA_MIGRATIONS_TABLE = "schema_migrations"


class ConfigurationError(ValueError):
    """Raised when the ignore list holds something other than names and patterns."""


class NameSelector(ABC):
    """Matches a (prefix/suffix-stripped) table name against one criterion."""

    @abstractmethod
    def matches(self, name: str) -> bool:
        """Return True if the stripped name matches this selector."""
        ...


class LiteralNameSelector(NameSelector):
    """Selector that matches one exact name."""

    def __init__(self, name: str):
        self.name = name

    def matches(self, name: str) -> bool:
        return name == self.name


class PatternSelector(NameSelector):
    """
    Selector that matches names with a compiled regular expression.

    The pattern is applied with ``search`` so unanchored patterns match
    anywhere in the name.
    """

    def __init__(self, pattern: re.Pattern[str]):
        self.regex = pattern

    def matches(self, name: str) -> bool:
        return bool(self.regex.search(name))


class AnySelector(NameSelector):
    """Composite selector that matches if any child selector matches."""

    def __init__(self, selectors: list[NameSelector]):
        self.selectors = selectors

    def matches(self, name: str) -> bool:
        return any(s.matches(name) for s in self.selectors)


def build_ignore_selector(entries: Iterable[object]) -> AnySelector:
    """
    Build the selector for an ignore list.

    Args:
        entries: Literal names (``str``) and/or compiled ``re.Pattern`` objects.

    Returns:
        A selector that also always matches ``schema_migrations``.

    Raises:
        ConfigurationError: If an entry is neither a string nor a pattern.
    """
    selectors: list[NameSelector] = [LiteralNameSelector(SCHEMA_MIGRATIONS_TABLE)]
    for entry in entries:
        if isinstance(entry, str):
            selectors.append(LiteralNameSelector(entry))
        elif isinstance(entry, re.Pattern):
            selectors.append(PatternSelector(entry))
        else:
            raise ConfigurationError(
                "ignore_tables accepts a list of str and/or re.Pattern values, "
                f"got {type(entry).__name__}: {entry!r}"
            )
    return AnySelector(selectors)


class TableFilter:
    """Applies the ignore list to table and synonym names."""

    def __init__(self, ignore_tables: Iterable[object], naming: NamingConfig):
        self.naming = naming
        self.selector = build_ignore_selector(ignore_tables)

    def ignored(self, name: str) -> bool:
        """Return True if the name is excluded from the dump."""
        return self.selector.matches(self.naming.strip(name))

    def sort_key(self, name: str) -> tuple[str, str]:
        """Order by the stripped name; the raw name breaks ties."""
        return self.naming.strip(name), name

    def select(
        self, tables: Iterable[str], excluded: Iterable[str] = ()
    ) -> list[str]:
        """
        Return the tables to dump, sorted by their stripped names.

        Names in ``excluded`` (materialized views) are dropped before the
        ignore list is applied.
        """
        skip = set(excluded)
        return sorted(
            (t for t in tables if t not in skip and not self.ignored(t)),
            key=self.sort_key,
        )

"""Dump option construction utilities.

Translates CLI arguments into a :class:`DumpOptions` instance. Ignore
entries written as ``/pattern/`` become compiled regular expressions;
everything else stays a literal table name.
"""

import re
from typing import Iterable

from oradump.core.models import DumpOptions
from oradump.core.selectors import ConfigurationError


def parse_ignore_entry(entry: str) -> str | re.Pattern[str]:
    """
    Turn one ``--ignore`` value into a literal name or a compiled pattern.

    Raises:
        ConfigurationError: If a ``/pattern/`` entry is not a valid regex.
    """
    if len(entry) >= 2 and entry.startswith("/") and entry.endswith("/"):
        try:
            return re.compile(entry[1:-1])
        except re.error as exc:
            raise ConfigurationError(f"Invalid ignore pattern {entry}: {exc}") from exc
    return entry


def build_dump_options(
    *,
    ignore: Iterable[str],
    prefix: str,
    suffix: str,
) -> DumpOptions:
    """Build dump options from CLI values."""
    return DumpOptions(
        ignore_tables=tuple(parse_ignore_entry(e) for e in ignore),
        table_name_prefix=prefix or "",
        table_name_suffix=suffix or "",
    )

"""Table name prefix/suffix handling."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

_INTERPOLATION = re.compile(r"#(?=[{$@])")


@dataclass(frozen=True)
class NamingConfig:
    """Prefix and suffix that the application adds to every table name."""

    prefix: str = ""
    suffix: str = ""

    def strip(self, table_name: str) -> str:
        """Return the table name without the configured prefix and suffix."""
        rx = re.compile(rf"\A{re.escape(self.prefix)}(.+){re.escape(self.suffix)}\Z")
        match = rx.match(table_name)
        return match.group(1) if match else table_name

    def display(self, table_name: str) -> str:
        """Return the stripped table name as a quoted literal."""
        return quote(self.strip(table_name))


def quote(value: object) -> str:
    """
    Render a string (or list of strings) as a double-quoted literal.

    >>> quote("users")
    '"users"'
    >>> quote(["a", "b"])
    '["a", "b"]'

    ``#`` before ``{``, ``$`` or ``@`` is escaped so the literal is never
    interpolated when schema.rb is loaded.
    """
    if isinstance(value, tuple):
        value = list(value)
    return _INTERPOLATION.sub(r"\\#", json.dumps(value, ensure_ascii=False))

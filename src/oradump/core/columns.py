"""Aligned rendering of column lines inside a ``create_table`` block."""

from __future__ import annotations

import re
from typing import Mapping, Sequence

_TRAILING_COMMA = re.compile(r",\s*$")


def used_keys(
    specs: Sequence[Mapping[str, str]], migration_keys: Sequence[str]
) -> list[str]:
    """Return the canonical keys that appear in at least one column spec."""
    present = {key for spec in specs for key in spec}
    return [key for key in migration_keys if key in present]


def format_column_rows(
    specs: Sequence[Mapping[str, str]], migration_keys: Sequence[str]
) -> list[str]:
    """
    Render column specs as ``t.<type> ...`` lines with aligned attributes.

    Every attribute key gets its own column, as wide as its longest value
    plus two characters for the ``", "`` separator; rows without the key get
    blank padding. Type names are padded to the longest type so attribute
    columns start at the same offset on every row. The trailing comma (and
    any padding after it) is removed from each line.

    Args:
        specs: One mapping per column; ``type`` holds the type name, other
               keys hold fully rendered attributes (e.g. ``limit: 100``).
        migration_keys: Canonical key order.

    Returns:
        One line per spec, without newline.
    """
    keys = used_keys(specs, migration_keys)
    lengths = [
        max((len(spec[key]) + 2 if key in spec else 0) for spec in specs)
        for key in keys
    ]
    type_length = max((len(spec["type"]) for spec in specs), default=0)

    rows: list[str] = []
    for spec in specs:
        cells = [
            (spec[key] + ", ").ljust(length) if key in spec else " " * length
            for key, length in zip(keys, lengths)
        ]
        line = f"    t.{spec['type'].ljust(type_length)} " + "".join(cells)
        rows.append(_TRAILING_COMMA.sub("", line))
    return rows

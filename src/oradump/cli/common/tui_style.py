"""Questionary / prompt_toolkit theme for oradump.

Questionary uses prompt_toolkit under the hood; this is the one style used
by the overwrite confirmation prompt.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold",
        "answer": "bold ansicyan",
        "instruction": "ansibrightblack",
        "error": "bold ansired",
    }
)

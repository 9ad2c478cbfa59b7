"""Placeholder substitution for page templates.

Templates mark insertion points with ``{{KEY}}`` tokens. Rendering swaps each
token whose key is present in the context for its value and leaves every
other token untouched, so a template can be filled in several passes.

Functions:
    render_template: Substitute placeholders in a template string.
    placeholders: List the placeholder keys a template uses.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

# Conventional {{KEY}} names, used when listing a template's slots
_PLACEHOLDER_RE = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """Replace ``{{KEY}}`` tokens with values from context.

    All tokens are resolved in one scan of the original template, so text
    inserted for one key is never searched for further tokens.

    Args:
        template: Template text.
        context: Mapping of placeholder name to replacement value.

    Returns:
        The rendered text.

    Examples:
        >>> render_template("Hello {{NAME}}", {"NAME": "World"})
        'Hello World'

        >>> render_template("{{A}} {{B}}", {"A": "{{B}}"})
        '{{B}} {{B}}'
    """
    if not template:
        return ""
    if not context:
        return template

    # One alternation over every context token; longest first so a key
    # containing another key's token is matched whole
    tokens = {"{{" + str(key) + "}}": value for key, value in context.items()}
    pattern = re.compile(
        "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))
    )

    def repl(match: re.Match) -> str:
        value = tokens[match.group(0)]
        return "" if value is None else str(value)

    return pattern.sub(repl, template)


def placeholders(template: str) -> list[str]:
    """Return the unique placeholder keys in template, in order of appearance."""
    seen: list[str] = []
    for key in _PLACEHOLDER_RE.findall(template or ""):
        if key not in seen:
            seen.append(key)
    return seen

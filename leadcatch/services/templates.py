"""Template substitution for notification and missed-call SMS templates.

Templates use ``{{name}}`` slots. Substitution is a single literal,
case-sensitive pass over the template; slots without a value are left as-is
and inserted values are never scanned again. There are no defaults,
conditionals or nesting.
"""

import re
from collections.abc import Iterable, Mapping

# Matches {{variable_name}}
_VAR_PATTERN = re.compile(r"\{\{([a-zA-Z_][a-zA-Z0-9_]*)\}\}")

NOTIFICATION_VARIABLES = ("ticket", "client_phone", "company", "date")
MISSED_CALL_VARIABLES = ("company", "form_link")


def extract_variables(template_content: str) -> list[str]:
    """Return the sorted unique variable names referenced by a template."""
    return sorted({match.group(1) for match in _VAR_PATTERN.finditer(template_content or "")})


def unknown_variables(template_content: str, known: Iterable[str]) -> list[str]:
    """Return variables referenced by the template that are not in ``known``."""
    known_set = set(known)
    return [name for name in extract_variables(template_content) if name not in known_set]


def render(template_content: str | None, variables: Mapping[str, str]) -> str:
    """Replace every ``{{name}}`` occurrence with ``variables[name]``.

    Unmatched slots stay in the output literally; this never raises for a
    missing variable.
    """

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in variables:
            return str(variables[name])
        return match.group(0)

    return _VAR_PATTERN.sub(_replace, template_content or "")

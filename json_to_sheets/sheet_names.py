"""
Sheet-title rules for XLSX output.

Excel rejects titles that are empty, longer than 31 characters, contain any
of ``[ ] : * ? / \\``, or start/end with an apostrophe.  Control characters
XML cannot hold are rejected too.  Titles are also compared
case-insensitively, so ``Data`` and ``data`` cannot coexist.
"""

import logging
import re

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from .errors import SheetNameError

logger = logging.getLogger(__name__)

MAX_SHEET_TITLE_LENGTH = 31
INVALID_TITLE_CHARS = "[]:*?/\\"
SHEET_NAME_POLICIES = ("error", "sanitize")

_INVALID_CHARS_RE = re.compile(r"[\[\]:*?/\\]")


def title_problem(name):
    """Return why *name* is not a valid sheet title, or ``None`` if it is."""
    if not name:
        return "sheet titles cannot be empty"
    if ILLEGAL_CHARACTERS_RE.search(name):
        return "contains control character(s) not allowed in XLSX"
    if len(name) > MAX_SHEET_TITLE_LENGTH:
        return f"longer than {MAX_SHEET_TITLE_LENGTH} characters"
    bad = sorted(set(_INVALID_CHARS_RE.findall(name)))
    if bad:
        return f"contains invalid character(s) {' '.join(bad)}"
    if name.startswith("'") or name.endswith("'"):
        return "cannot start or end with an apostrophe"
    return None


def validate_sheet_name(name):
    """Raise :class:`SheetNameError` if *name* is not a valid sheet title."""
    problem = title_problem(name)
    if problem:
        raise SheetNameError(name, problem)
    return name


def sanitize_sheet_name(name, fallback="Sheet"):
    """Coerce *name* into a valid title (ignores uniqueness)."""
    title = ILLEGAL_CHARACTERS_RE.sub("", name)
    title = _INVALID_CHARS_RE.sub("_", title).strip("'")
    title = title[:MAX_SHEET_TITLE_LENGTH].strip("'")
    return title or fallback


def _unique_title(title, used):
    base = title
    n = 2
    while title.lower() in used:
        suffix = f" ({n})"
        title = base[:MAX_SHEET_TITLE_LENGTH - len(suffix)] + suffix
        n += 1
    return title


def resolve_sheet_titles(names, policy="sanitize"):
    """Map each sheet name to the title written to the workbook.

    Args:
        names: Sheet names in workbook order.
        policy: ``"error"`` raises :class:`SheetNameError` on the first name
            that is invalid or clashes (case-insensitively) with an earlier
            one.  ``"sanitize"`` rewrites such names and logs a warning.

    Returns:
        dict of sheet name -> sheet title, in the order of *names*.
    """
    if policy not in SHEET_NAME_POLICIES:
        raise ValueError(
            f"Invalid sheet name policy '{policy}'. "
            f"Must be one of {SHEET_NAME_POLICIES}."
        )

    titles = {}
    used = set()
    for name in names:
        if policy == "error":
            validate_sheet_name(name)
            if name.lower() in used:
                raise SheetNameError(
                    name, "differs from another sheet name only by case")
            title = name
        else:
            title = _unique_title(sanitize_sheet_name(name), used)
            if title != name:
                logger.warning(
                    f"Sheet '{name}' written as '{title}' "
                    f"({title_problem(name) or 'duplicate title'})"
                )
        used.add(title.lower())
        titles[name] = title
    return titles

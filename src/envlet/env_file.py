"""Parse .env text into ordered name/value definitions.

Handles:
  - blank lines and ``#`` comments
  - ``export KEY=VALUE`` prefix (strict mode)
  - inline comments after the value (``#`` outside quotes, not escaped)
  - values with ``=`` in them (only first ``=`` splits)
  - CRLF and LF line endings

Quotes are kept in values unless ``strip_quotes`` is requested.  Variable
references such as ``$HOME`` or ``${HOME}`` are never expanded.

Three parsing modes are available through :func:`parse_env_text`:

``strict``
    Canonical.  Each line must match ``NAME = VALUE`` with an identifier
    name.  Values are always normalized.
``lenient``
    Each line goes through :func:`parse_line` (split on the first ``=``).
``scan``
    Whole-text regex scan through :func:`scan_document`.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import NamedTuple

logger = logging.getLogger(__name__)

# Effectively "whole document".
DEFAULT_MAX_OFFSET: int = sys.maxsize

PARSE_MODES: tuple[str, ...] = ("strict", "lenient", "scan")

NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_LINE_RE = re.compile(
    r"""
    ^\s*
    (?:export\s+)?              # optional export prefix
    ([A-Za-z_][A-Za-z0-9_]*)    # name
    \s*=                        # separator
    (.*)                        # raw value (normalized below)
    $
    """,
    re.VERBOSE,
)

# Printable value characters: tab is allowed, other control characters are not.
_SCAN_RE = re.compile(
    r"^([A-Za-z_][A-Za-z0-9_]*)=([^\x00-\x08\x0a-\x1f\x7f]+)\r?$",
    re.MULTILINE,
)

_EOL_RE = re.compile(r"\r\n|\r|\n")

_QUOTES = ("'", '"')

# Comment scanner states
_BARE = "bare"
_IN_SINGLE_QUOTE = "in_single_quote"
_IN_DOUBLE_QUOTE = "in_double_quote"
_AFTER_BACKSLASH = "after_backslash"


class Definition(NamedTuple):
    """One ``NAME=VALUE`` pair, in the order it appeared in the document."""

    name: str
    value: str


def is_valid_name(name: str) -> bool:
    """Return True if *name* is a ``[A-Za-z_][A-Za-z0-9_]*`` identifier."""
    return bool(NAME_PATTERN.fullmatch(name))


# ---------------------------------------------------------------------------
# Line parser
# ---------------------------------------------------------------------------

def parse_line(line: str) -> Definition | None:
    """Split one line at its first ``=``.

    Returns ``None`` for blank lines, full-line comments and lines without
    ``=``.  The name is not validated and neither part is normalized.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    name, sep, raw = stripped.partition("=")
    if not sep:
        return None
    return Definition(name, raw)


# ---------------------------------------------------------------------------
# Value normalizer
# ---------------------------------------------------------------------------

def find_inline_comment(raw: str) -> int:
    """Return the index of the first ``#`` that starts an inline comment, or -1.

    A ``#`` is data when it sits inside single or double quotes or directly
    follows a backslash.  Backslashes are literal inside single quotes.  An
    unterminated quote runs to the end of the value.
    """
    state = _BARE
    resume = _BARE
    for index, char in enumerate(raw):
        if state == _AFTER_BACKSLASH:
            state = resume
        elif state == _BARE:
            if char == "#":
                return index
            if char == "\\":
                resume, state = _BARE, _AFTER_BACKSLASH
            elif char == "'":
                state = _IN_SINGLE_QUOTE
            elif char == '"':
                state = _IN_DOUBLE_QUOTE
        elif state == _IN_SINGLE_QUOTE:
            if char == "'":
                state = _BARE
        elif state == _IN_DOUBLE_QUOTE:
            if char == "\\":
                resume, state = _IN_DOUBLE_QUOTE, _AFTER_BACKSLASH
            elif char == '"':
                state = _BARE
    return -1


def normalize_value(raw: str, *, strip_quotes: bool = False) -> str:
    """Drop an inline comment from *raw* and trim surrounding whitespace.

    With ``strip_quotes`` one matching pair of surrounding ``'`` or ``"`` is
    removed after trimming.  Escapes are left as written.
    """
    cut = find_inline_comment(raw)
    value = (raw if cut < 0 else raw[:cut]).strip()
    if strip_quotes and len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1]
    return value


# ---------------------------------------------------------------------------
# Document scanner
# ---------------------------------------------------------------------------

def scan_document(text: str, max_offset: int = DEFAULT_MAX_OFFSET) -> tuple[Definition, ...]:
    """Collect every strict ``NAME=VALUE`` line of *text* in document order.

    Values are returned exactly as matched (not normalized).  A match is kept
    only if it ends at or before *max_offset*; scanning stops at the first
    match past the bound.
    """
    limit = min(len(text), max_offset)
    found: list[Definition] = []
    if limit < 0:
        return ()
    for m in _SCAN_RE.finditer(text):
        if m.end() > limit:
            logger.debug("Scan stopped at offset %d (bound %d)", m.start(), limit)
            break
        found.append(Definition(m.group(1), m.group(2)))
    return tuple(found)


def _iter_lines(text: str, limit: int) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, content)`` for lines whose content ends by *limit*."""
    start = 0
    number = 0
    for number, m in enumerate(_EOL_RE.finditer(text), start=1):
        if m.start() > limit:
            return
        yield number, text[start:m.start()]
        start = m.end()
    if start < len(text) and len(text) <= limit:
        yield number + 1, text[start:]


# ---------------------------------------------------------------------------
# Canonical document parser
# ---------------------------------------------------------------------------

def parse_env_text(
    text: str,
    *,
    mode: str = "strict",
    max_offset: int = DEFAULT_MAX_OFFSET,
    strip_quotes: bool = False,
) -> tuple[Definition, ...]:
    """Parse a whole document into normalized definitions.

    Malformed lines are skipped.  Raises ``ValueError`` for an unknown *mode*.
    """
    if mode not in PARSE_MODES:
        raise ValueError(f"Unknown parse mode {mode!r}. Use one of: {', '.join(PARSE_MODES)}")

    if mode == "scan":
        return tuple(
            Definition(d.name, normalize_value(d.value, strip_quotes=strip_quotes))
            for d in scan_document(text, max_offset)
        )

    limit = min(len(text), max_offset)
    result: list[Definition] = []
    for number, line in _iter_lines(text, limit):
        if mode == "strict":
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            m = _LINE_RE.match(stripped)
            if m is None:
                logger.debug("Skipping malformed line %d", number)
                continue
            name, raw = m.group(1), m.group(2)
        else:
            parsed = parse_line(line)
            if parsed is None:
                continue
            name, raw = parsed.name.strip(), parsed.value
            if not name:
                logger.debug("Skipping line %d with empty name", number)
                continue
        result.append(Definition(name, normalize_value(raw, strip_quotes=strip_quotes)))
    return tuple(result)


def definitions_to_dict(definitions: Iterable[Definition]) -> dict[str, str]:
    """Collapse definitions into a dict; the last definition of a name wins."""
    result: dict[str, str] = {}
    for name, value in definitions:
        result[name] = value
    return result


def read_env_file(path: str | Path) -> str:
    """Read a .env file to completion as UTF-8 text."""
    return Path(path).read_text(encoding="utf-8")


def parse_env_file(
    path: str | Path,
    *,
    mode: str = "strict",
    max_offset: int = DEFAULT_MAX_OFFSET,
    strip_quotes: bool = False,
) -> dict[str, str]:
    """Read a .env file and return an ordered dict of name-value pairs."""
    definitions = parse_env_text(
        read_env_file(path), mode=mode, max_offset=max_offset, strip_quotes=strip_quotes,
    )
    return definitions_to_dict(definitions)

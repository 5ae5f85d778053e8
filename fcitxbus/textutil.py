"""Text helpers for the input context: environment flags, locale and offsets.

Editors report positions in UTF-16 code units, the service counts Unicode
code points, and preedit cursors arrive as UTF-8 byte offsets. The functions
here convert between these.
"""

from __future__ import annotations

import os
from typing import Mapping

SURROUNDING_THRESHOLD = 4096
"""Surrounding text at least this long (in UTF-16 units) is not sent."""

_FALSE_VALUES = frozenset({"", "0", "false", "False", "FALSE"})
_LOCALE_VARIABLES = ("LC_ALL", "LC_CTYPE", "LANG")


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def _utf16_prefix_code_points(text: str, units: int) -> int:
    """How many code points lie in the first ``units`` UTF-16 units of ``text``."""
    if units < 0 or units >= _utf16_length(text):
        return len(text)
    count = 0
    consumed = 0
    for char in text:
        if consumed >= units:
            break
        consumed += 2 if ord(char) > 0xFFFF else 1
        count += 1
    return count


def get_boolean_env(
    name: str, default: bool = False, environ: Mapping[str, str] | None = None
) -> bool:
    """Read a boolean flag; unset gives ``default``, "", "0" and "false" give False."""
    env = os.environ if environ is None else environ
    value = env.get(name)
    if value is None:
        return default
    return value not in _FALSE_VALUES


def get_locale(environ: Mapping[str, str] | None = None) -> str:
    """The character locale: LC_ALL, then LC_CTYPE, then LANG, else "C"."""
    env = os.environ if environ is None else environ
    for variable in _LOCALE_VARIABLES:
        value = env.get(variable)
        if value is not None:
            return value
    return "C"


def check_utf8(data: bytes) -> bool:
    """Whether ``data`` is well-formed UTF-8."""
    try:
        bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def surrounding_position(
    text: str, cursor: int, anchor: int | None = None
) -> tuple[int, int] | None:
    """Convert UTF-16 cursor and anchor to code points.

    Returns None when the text is too long to send or is not valid Unicode.
    A missing anchor is taken to be the cursor.
    """
    if _utf16_length(text) >= SURROUNDING_THRESHOLD:
        return None
    if not check_utf8(text.encode("utf-8", "surrogatepass")):
        return None
    if anchor is None:
        anchor = cursor
    return (
        _utf16_prefix_code_points(text, cursor),
        _utf16_prefix_code_points(text, anchor),
    )


def delete_surrounding_range(
    text: str, cursor: int, anchor: int, offset: int, nchar: int
) -> tuple[int, int] | None:
    """Turn a code-point deletion request into a UTF-16 (offset, length) pair.

    ``cursor`` and ``anchor`` are code-point positions in ``text``. The current
    selection is not counted in ``nchar``. Returns None when the request falls
    outside the text.
    """
    if anchor < cursor:
        nchar -= cursor - anchor
        offset += cursor - anchor
        cursor = anchor
    elif anchor > cursor:
        nchar -= anchor - cursor

    if nchar < 0 or cursor + offset < 0 or cursor + offset + nchar > len(text):
        return None

    replaced = text[cursor + offset : cursor + offset + nchar]
    length = _utf16_length(replaced)

    if offset >= 0:
        start, span = cursor, offset
    else:
        start, span = cursor + offset, -offset
    prefix = text[start : start + span]
    sign = 1 if offset >= 0 else -1
    return (_utf16_length(prefix) * sign, length)


def preedit_cursor_position(text: str, byte_cursor: int) -> int:
    """Convert a UTF-8 byte offset into ``text`` to a UTF-16 position."""
    data = text.encode("utf-8", "surrogatepass")
    data = data[: max(byte_cursor, 0)]
    return _utf16_length(data.decode("utf-8", "replace"))
"""Identity of the input method module: keys, description and languages."""

from __future__ import annotations

DESCRIPTION = "Qt immodule plugin for Fcitx 5"

_KEYS = ("fcitx5", "fcitx")


def is_fcitx(key: str) -> bool:
    return key.lower() in _KEYS


def keys(with_fcitx_name: bool = True) -> list[str]:
    """The module keys offered; the short alias only when enabled."""
    return list(_KEYS) if with_fcitx_name else [_KEYS[0]]


def description(key: str) -> str:
    return DESCRIPTION if is_fcitx(key) else ""


def languages(key: str) -> list[str]:
    # The language list is only filled for keys that are not ours.
    if not is_fcitx(key):
        return ["zh", "ja", "ko"]
    return []


def display_name(key: str) -> str:
    return key
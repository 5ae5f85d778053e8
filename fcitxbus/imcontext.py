"""Per-widget input context state and preedit composition.

``ICData`` holds what the client keeps for each focused widget: the
capability mask it has announced, the proxy it talks through, the last
cursor rectangle, and the last surrounding text it sent.
``compose_preedit`` turns a formatted preedit from the service into the text
to show, the text to commit on focus loss, and the formatted segments.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol

from .textutil import _utf16_length, preedit_cursor_position
from .types import FormattedPreedit


class _CapabilityTarget(Protocol):
    def is_valid(self) -> bool: ...

    def set_capability(self, caps: int) -> Any: ...


class MouseButton(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class MouseAction(enum.IntEnum):
    """Action numbers sent with ``InvokeAction``."""

    LEFT_CLICK = 0
    RIGHT_CLICK = 1


def mouse_action(button: MouseButton | str) -> MouseAction | None:
    """The action for a released mouse button, or None if it has none."""
    button = MouseButton(button)
    if button is MouseButton.LEFT:
        return MouseAction.LEFT_CLICK
    if button is MouseButton.RIGHT:
        return MouseAction.RIGHT_CLICK
    return None


@dataclass
class ICData:
    """Client-side state of one input context."""

    proxy: _CapabilityTarget | None = None
    capability: int = 0
    rect: tuple[int, int, int, int] | None = None
    event: Any = None
    surrounding_text: str = ""
    surrounding_anchor: int = -1
    surrounding_cursor: int = -1

    def _apply(self, new_caps: int, force: bool) -> bool:
        if self.capability == new_caps and not force:
            return False
        self.capability = new_caps
        self._update_capability()
        return True

    def _update_capability(self) -> None:
        if self.proxy is None or not self.proxy.is_valid():
            return
        self.proxy.set_capability(self.capability)

    def add_capability(self, capability: int, force: bool = False) -> bool:
        """Set bits of ``capability``; tell the service if the mask changed or ``force``."""
        if capability < 0:
            raise ValueError("capability must not be negative")
        return self._apply(self.capability | capability, force)

    def remove_capability(self, capability: int, force: bool = False) -> bool:
        """Clear bits of ``capability``; tell the service if the mask changed or ``force``."""
        if capability < 0:
            raise ValueError("capability must not be negative")
        return self._apply(self.capability & ~capability, force)

    def clear_surrounding(self) -> None:
        self.surrounding_text = ""
        self.surrounding_anchor = -1
        self.surrounding_cursor = -1


@dataclass(frozen=True)
class PreeditSegment:
    """A formatted run of the preedit, positioned in UTF-16 units."""

    start: int
    length: int
    format: int


@dataclass(frozen=True)
class ComposedPreedit:
    text: str
    commit_text: str
    cursor: int
    segments: list[PreeditSegment] = field(default_factory=list)


def compose_preedit(
    preedit_list: Iterable[FormattedPreedit], cursor_pos: int, dont_commit: int
) -> ComposedPreedit:
    """Join preedit pieces; ``cursor_pos`` is a UTF-8 byte offset.

    Pieces whose format has any bit of ``dont_commit`` set are shown but left
    out of the commit text.
    """
    text_parts: list[str] = []
    commit_parts: list[str] = []
    segments: list[PreeditSegment] = []
    pos = 0
    for piece in preedit_list:
        if not isinstance(piece, FormattedPreedit):
            piece = FormattedPreedit.from_dbus(piece)
        text_parts.append(piece.string)
        if not piece.format & dont_commit:
            commit_parts.append(piece.string)
        length = _utf16_length(piece.string)
        segments.append(PreeditSegment(pos, length, piece.format))
        pos += length
    text = "".join(text_parts)
    return ComposedPreedit(
        text=text,
        commit_text="".join(commit_parts),
        cursor=preedit_cursor_position(text, cursor_pos),
        segments=segments,
    )
"""Message types and text helpers for clients of the Fcitx 5 input method."""

__version__ = "5.1.10"

__all__ = ["types", "plugin", "textutil", "imcontext"]
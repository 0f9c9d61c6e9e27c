"""Typed action catalog and conversation store for in-room text chat."""

from loop_chat._version import __version__

__all__ = ["__version__"]

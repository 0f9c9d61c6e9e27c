"""Concrete implementations of collaborator interfaces."""

from .loopback import LoggingNotifier, LoopbackDataDriver

__all__ = [
    "LoggingNotifier",
    "LoopbackDataDriver",
]

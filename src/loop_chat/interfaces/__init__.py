"""Protocol definitions for pluggable collaborators."""

from .data_driver import DataDriver
from .handler import ActionHandler
from .notifier import HostEvent, HostNotifier

__all__ = ["ActionHandler", "DataDriver", "HostEvent", "HostNotifier"]

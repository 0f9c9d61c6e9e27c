"""Abstract interface for components that consume dispatched actions."""

from typing import Protocol

from ..actions.base import Action


class ActionHandler(Protocol):
    """Anything a dispatcher can route actions to."""

    def handle(self, action: Action) -> None:
        """
        Handle one action, synchronously and to completion.

        Args:
            action: The dispatched action
        """
        ...

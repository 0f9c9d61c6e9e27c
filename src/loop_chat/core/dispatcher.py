"""Synchronous action dispatcher.

Routes each action, by name, to the handlers registered for it. Handlers
run one action at a time and to completion; an action enqueued while
another is being handled is delivered once that one finishes. If a handler
raises, actions still queued behind it are discarded.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from loop_chat.actions.base import Action
    from loop_chat.interfaces.handler import ActionHandler

log = structlog.get_logger()


class DispatchError(Exception):
    """Raised when an action is dispatched from inside a handler."""


class Dispatcher:
    """Delivers actions to registered handlers in order, exactly once.

    Example:
        dispatcher = Dispatcher()
        dispatcher.register(store, store.ACTIONS)
        dispatcher.dispatch(RemotePeerConnected())
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[ActionHandler]] = {}
        self._queue: deque[Action] = deque()
        self._active: Action | None = None

    def register(self, handler: ActionHandler, names: Iterable[str]) -> None:
        """Subscribe a handler to the given action names."""
        for name in names:
            handlers = self._handlers.setdefault(name, [])
            if handler not in handlers:
                handlers.append(handler)

    def unregister(self, handler: ActionHandler) -> None:
        """Remove a handler from every action it was subscribed to."""
        for handlers in self._handlers.values():
            if handler in handlers:
                handlers.remove(handler)

    @property
    def dispatching(self) -> bool:
        """Whether an action is currently being handled."""
        return self._active is not None

    def dispatch(self, action: Action) -> None:
        """Deliver an action now.

        Raises:
            DispatchError: If called while another action is being handled
        """
        if self._active is not None:
            raise DispatchError(
                f"Cannot dispatch {action.name} while dispatching {self._active.name}"
            )
        self._queue.append(action)
        self._drain()

    def enqueue(self, action: Action) -> None:
        """Deliver an action once the current one, if any, has been handled."""
        self._queue.append(action)
        if self._active is None:
            self._drain()

    def _drain(self) -> None:
        try:
            while self._queue:
                self._deliver(self._queue.popleft())
        finally:
            # Follow-ups of a failed action are dropped with it
            if self._queue:
                log.warning("queued_actions_dropped", count=len(self._queue))
                self._queue.clear()

    def _deliver(self, action: Action) -> None:
        handlers = self._handlers.get(action.name)
        if not handlers:
            log.debug("action_unhandled", action=action.name)
            return

        self._active = action
        try:
            for handler in list(handlers):
                handler.handle(action)
        finally:
            self._active = None

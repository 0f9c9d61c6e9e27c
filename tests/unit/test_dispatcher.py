"""Tests for the action dispatcher."""

from unittest.mock import MagicMock

import pytest

from loop_chat.actions.catalog import (
    DataChannelsAvailable,
    RemotePeerConnected,
    SetOwnDisplayName,
)
from loop_chat.core.dispatcher import DispatchError, Dispatcher


class RecordingHandler:
    """Handler that records what it was given and runs an optional hook."""

    def __init__(self, hook=None):
        self.handled = []
        self.hook = hook

    def handle(self, action):
        self.handled.append(action.name)
        if self.hook is not None:
            self.hook(action)


class TestDispatch:
    """Test delivering actions."""

    def test_routes_by_name(self):
        """Test that handlers only get the actions they registered for."""
        dispatcher = Dispatcher()
        handler = MagicMock()
        dispatcher.register(handler, ["remotePeerConnected"])

        action = RemotePeerConnected()
        dispatcher.dispatch(action)
        dispatcher.dispatch(SetOwnDisplayName(display_name="Ada"))

        handler.handle.assert_called_once_with(action)

    def test_delivers_to_every_handler_in_order(self):
        """Test that all handlers for a name are called in registration order."""
        dispatcher = Dispatcher()
        calls = []
        first = RecordingHandler(lambda a: calls.append("first"))
        second = RecordingHandler(lambda a: calls.append("second"))
        dispatcher.register(first, ["remotePeerConnected"])
        dispatcher.register(second, ["remotePeerConnected"])

        dispatcher.dispatch(RemotePeerConnected())

        assert calls == ["first", "second"]

    def test_registering_twice_delivers_once(self):
        """Test that a handler registered twice is still called once."""
        dispatcher = Dispatcher()
        handler = MagicMock()
        dispatcher.register(handler, ["remotePeerConnected"])
        dispatcher.register(handler, ["remotePeerConnected"])

        dispatcher.dispatch(RemotePeerConnected())

        handler.handle.assert_called_once()

    def test_unhandled_action_is_ignored(self):
        """Test dispatching an action nobody subscribed to."""
        dispatcher = Dispatcher()

        dispatcher.dispatch(RemotePeerConnected())

        assert dispatcher.dispatching is False

    def test_unregister(self):
        """Test that unregistered handlers stop receiving actions."""
        dispatcher = Dispatcher()
        handler = MagicMock()
        dispatcher.register(handler, ["remotePeerConnected", "setOwnDisplayName"])

        dispatcher.unregister(handler)
        dispatcher.dispatch(RemotePeerConnected())

        handler.handle.assert_not_called()

    def test_register_with_store_actions(self, store):
        """Test wiring a store through its action table."""
        dispatcher = Dispatcher()
        dispatcher.register(store, store.ACTIONS)

        dispatcher.dispatch(SetOwnDisplayName(display_name="Ada"))

        assert store.state.display_name == "Ada"


class TestReentrancy:
    """Test actions raised while another is being handled."""

    def test_dispatch_from_handler_raises(self):
        """Test that dispatching from inside a handler is an error."""
        dispatcher = Dispatcher()
        handler = RecordingHandler(lambda a: dispatcher.dispatch(RemotePeerConnected()))
        dispatcher.register(handler, ["setOwnDisplayName"])

        with pytest.raises(DispatchError, match="remotePeerConnected"):
            dispatcher.dispatch(SetOwnDisplayName(display_name="Ada"))

        assert dispatcher.dispatching is False

    def test_enqueue_from_handler_runs_after(self):
        """Test that an enqueued action is delivered after the current one."""
        dispatcher = Dispatcher()
        order = []

        def on_name(action):
            order.append("name-start")
            dispatcher.enqueue(RemotePeerConnected())
            order.append("name-end")

        dispatcher.register(RecordingHandler(on_name), ["setOwnDisplayName"])
        dispatcher.register(
            RecordingHandler(lambda a: order.append("connected")), ["remotePeerConnected"]
        )

        dispatcher.dispatch(SetOwnDisplayName(display_name="Ada"))

        assert order == ["name-start", "name-end", "connected"]

    def test_enqueue_when_idle_delivers_now(self):
        """Test that enqueue() outside a dispatch delivers immediately."""
        dispatcher = Dispatcher()
        handler = MagicMock()
        dispatcher.register(handler, ["dataChannelsAvailable"])

        dispatcher.enqueue(DataChannelsAvailable(available=True))

        handler.handle.assert_called_once()

    def test_dispatching_flag(self):
        """Test that the flag is set only while a handler runs."""
        dispatcher = Dispatcher()
        seen = []
        dispatcher.register(
            RecordingHandler(lambda a: seen.append(dispatcher.dispatching)),
            ["remotePeerConnected"],
        )

        assert dispatcher.dispatching is False
        dispatcher.dispatch(RemotePeerConnected())

        assert seen == [True]
        assert dispatcher.dispatching is False

    def test_handler_error_propagates_and_resets(self):
        """Test that a failing handler doesn't leave the dispatcher busy."""
        dispatcher = Dispatcher()

        def fail(action):
            raise RuntimeError("boom")

        dispatcher.register(RecordingHandler(fail), ["remotePeerConnected"])

        with pytest.raises(RuntimeError, match="boom"):
            dispatcher.dispatch(RemotePeerConnected())

        assert dispatcher.dispatching is False

    def test_handler_error_drops_queued_followups(self):
        """Test that actions enqueued by a failing handler aren't delivered later."""
        dispatcher = Dispatcher()
        connected = MagicMock()
        dispatcher.register(connected, ["remotePeerConnected"])

        def enqueue_then_fail(action):
            dispatcher.enqueue(RemotePeerConnected())
            raise RuntimeError("boom")

        dispatcher.register(RecordingHandler(enqueue_then_fail), ["setOwnDisplayName"])

        with pytest.raises(RuntimeError):
            dispatcher.dispatch(SetOwnDisplayName(display_name="Ada"))

        follow_up = DataChannelsAvailable(available=True)
        other = MagicMock()
        dispatcher.register(other, ["dataChannelsAvailable"])
        dispatcher.dispatch(follow_up)

        connected.handle.assert_not_called()
        other.handle.assert_called_once_with(follow_up)

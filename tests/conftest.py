"""Shared test fixtures for loop-chat."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from loop_chat.actions.base import ActionCatalog
from loop_chat.actions.catalog import build_default_catalog
from loop_chat.core.conversation_store import ConversationStore

FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)


@pytest.fixture
def catalog() -> ActionCatalog:
    """Return a catalog holding every action kind."""
    return build_default_catalog()


@pytest.fixture
def data_driver() -> MagicMock:
    """Create a mock data driver."""
    return MagicMock()


@pytest.fixture
def notifier() -> MagicMock:
    """Create a mock host notifier."""
    return MagicMock()


@pytest.fixture
def store(data_driver: MagicMock, notifier: MagicMock) -> ConversationStore:
    """Create a ConversationStore with mock collaborators and a fixed clock."""
    return ConversationStore(data_driver, notifier, clock=lambda: FIXED_NOW)

"""Shared fixtures for the watcher tests."""
from types import SimpleNamespace

import pytest

from board_watcher.state_manager import SqliteConfigStore


class RecordingNotifier:
    """Notifier stand-in that remembers every dispatch call."""

    def __init__(self):
        self.calls = []

    def dispatch(self, channel, destination, watch_config, mode, match_count=0):
        self.calls.append((channel, destination, watch_config.config_id, mode, match_count))


@pytest.fixture
def settings():
    return SimpleNamespace(
        APP_ID="default-app-id",
        STORE_BACKEND="sqlite",
        DATABASE_PATH="",
        TELEGRAM_BOT_TOKEN="123:abc",
        TELEGRAM_API_URL="https://api.telegram.org/bot{token}/sendMessage",
        TELEGRAM_TIMEOUT=10,
        DETECTOR="keyword",
        NEW_POST_PROBABILITY=0.1,
    )


@pytest.fixture
def store(tmp_path):
    return SqliteConfigStore(str(tmp_path / "db" / "configs.db"))


@pytest.fixture
def notifier():
    return RecordingNotifier()

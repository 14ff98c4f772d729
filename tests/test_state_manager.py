"""Tests for the config stores."""
import os
from types import SimpleNamespace
from unittest.mock import MagicMock, Mock

import pytest

from board_watcher.models import WatchConfig
from board_watcher.state_manager import (
    FirestoreConfigStore, SqliteConfigStore, create_store)


class TestSqliteConfigStore:

    def test_creates_database_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "configs.db"
        SqliteConfigStore(str(db_path))
        assert os.path.exists(db_path)

    def test_lists_users_and_configs_in_insertion_order(self, store):
        store.add_config("alice", "c1", "https://a.example", "특별공급", telegram_id="1")
        store.add_config("alice", "c2", "https://b.example", "맑은", email="a@example.com")
        store.add_user("bob")

        assert store.list_users() == ["alice", "bob"]
        configs = store.list_configs("alice")
        assert [c.config_id for c in configs] == ["c1", "c2"]
        assert configs[0].telegram_destination == "1"
        assert configs[0].email_destination is None
        assert configs[1].email_destination == "a@example.com"
        assert not configs[0].initial_scan_completed
        assert store.list_configs("bob") == []

    def test_mark_initial_scan_completed(self, store):
        store.add_config("alice", "c1", "https://a.example", "특별공급")
        config = store.list_configs("alice")[0]

        store.mark_initial_scan_completed(config)

        assert store.list_configs("alice")[0].initial_scan_completed

    def test_mark_unknown_config_raises(self, store):
        with pytest.raises(LookupError):
            store.mark_initial_scan_completed(WatchConfig(user_id="ghost", config_id="c9"))


class TestFirestoreConfigStore:

    def _doc(self, doc_id, data):
        doc = Mock()
        doc.id = doc_id
        doc.to_dict.return_value = data
        return doc

    def test_reads_users_and_configs_from_app_namespace(self):
        client = MagicMock()
        client.collection.return_value.list_documents.return_value = [self._doc("alice", None)]
        client.collection.return_value.get.return_value = [
            self._doc("c1", {"url": "https://a.example", "keyword": "특별공급",
                             "telegramId": 42, "lastInitialScrapeCompleted": True}),
        ]
        store = FirestoreConfigStore(None, "default-app-id", client=client)

        assert store.list_users() == ["alice"]
        configs = store.list_configs("alice")

        client.collection.assert_any_call("artifacts/default-app-id/users")
        client.collection.assert_any_call("artifacts/default-app-id/users/alice/scraper_configs")
        assert configs[0].telegram_destination == "42"
        assert configs[0].initial_scan_completed

    def test_mark_initial_scan_completed_updates_flag(self):
        client = MagicMock()
        store = FirestoreConfigStore(None, "default-app-id", client=client)

        store.mark_initial_scan_completed(WatchConfig(user_id="alice", config_id="c1"))

        client.document.assert_called_once_with(
            "artifacts/default-app-id/users/alice/scraper_configs/c1")
        client.document.return_value.update.assert_called_once_with(
            {"lastInitialScrapeCompleted": True})


def test_create_store_sqlite(tmp_path):
    settings = SimpleNamespace(STORE_BACKEND="sqlite", DATABASE_PATH=str(tmp_path / "x.db"))
    assert isinstance(create_store(settings), SqliteConfigStore)


def test_create_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_store(SimpleNamespace(STORE_BACKEND="redis"))


def test_document_defaults():
    config = WatchConfig.from_document("u", "c", {})
    assert config.keyword == ""
    assert config.telegram_destination is None
    assert config.email_destination is None
    assert config.initial_scan_completed is False

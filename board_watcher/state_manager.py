"""Access to the stored watch configurations."""
import sqlite3
import os
import logging

import firebase_admin
from firebase_admin import credentials as firebase_credentials
from firebase_admin import firestore

from .models import WatchConfig

logger = logging.getLogger(__name__)

INITIAL_SCAN_FIELD = "lastInitialScrapeCompleted"


class ConfigStore:
    """Read watch configs and persist the initial scan flag."""

    def list_users(self):
        raise NotImplementedError

    def list_configs(self, user_id):
        raise NotImplementedError

    def mark_initial_scan_completed(self, watch_config):
        raise NotImplementedError


class FirestoreConfigStore(ConfigStore):
    """Config store backed by Cloud Firestore.

    Layout: artifacts/{app_id}/users/{user_id}/scraper_configs/{config_id}
    """

    def __init__(self, service_account, app_id, client=None):
        self.users_path = f"artifacts/{app_id}/users"
        if client is None:
            app = firebase_admin.initialize_app(
                firebase_credentials.Certificate(service_account))
            client = firestore.client(app)
            logger.info("Firestore client initialized successfully")
        self.db = client

    def _configs_path(self, user_id):
        return f"{self.users_path}/{user_id}/scraper_configs"

    def list_users(self):
        return [doc.id for doc in self.db.collection(self.users_path).list_documents()]

    def list_configs(self, user_id):
        snapshot = self.db.collection(self._configs_path(user_id)).get()
        return [
            WatchConfig.from_document(user_id, doc.id, doc.to_dict() or {})
            for doc in snapshot
        ]

    def mark_initial_scan_completed(self, watch_config):
        path = f"{self._configs_path(watch_config.user_id)}/{watch_config.config_id}"
        self.db.document(path).update({INITIAL_SCAN_FIELD: True})
        logger.debug("Marked initial scan completed: %s", path)


class SqliteConfigStore(ConfigStore):
    """Config store kept in a local SQLite database."""

    def __init__(self, db_path):
        """Initialize the store with the path to the SQLite database."""
        self.db_path = db_path
        self._ensure_db_directory()
        self._init_db()

    def _ensure_db_directory(self):
        """Ensure the directory for the database file exists."""
        db_dir = os.path.dirname(self.db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir)
            logger.info("Created directory for database: %s", db_dir)

    def _init_db(self):
        """Initialize the database if it doesn't exist."""
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS users (
                    user_id TEXT PRIMARY KEY
                )
            ''')
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS scraper_configs (
                    user_id TEXT NOT NULL,
                    config_id TEXT NOT NULL,
                    url TEXT NOT NULL,
                    keyword TEXT,
                    telegram_id TEXT,
                    email TEXT,
                    initial_scan_completed INTEGER DEFAULT 0,
                    PRIMARY KEY (user_id, config_id),
                    FOREIGN KEY (user_id) REFERENCES users(user_id)
                )
            ''')
            conn.commit()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error("Error initializing database: %s", e)
            raise
        finally:
            conn.close()

    def add_user(self, user_id):
        """Register a user, ignoring duplicates."""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("INSERT OR IGNORE INTO users (user_id) VALUES (?)", (user_id,))
            conn.commit()
        finally:
            conn.close()

    def add_config(self, user_id, config_id, url, keyword, telegram_id=None,
                   email=None, initial_scan_completed=False):
        """Store a watch config for a user."""
        self.add_user(user_id)
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(
                """INSERT INTO scraper_configs
                (user_id, config_id, url, keyword, telegram_id, email, initial_scan_completed)
                VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (user_id, config_id, url, keyword, telegram_id, email,
                 int(initial_scan_completed))
            )
            conn.commit()
            logger.info("Added config %s for user %s", config_id, user_id)
        except Exception as e:
            logger.error("Error adding config: %s", e)
            conn.rollback()
            raise
        finally:
            conn.close()

    def list_users(self):
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute("SELECT user_id FROM users ORDER BY rowid")
            return [row[0] for row in cursor.fetchall()]
        finally:
            conn.close()

    def list_configs(self, user_id):
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(
                """SELECT config_id, url, keyword, telegram_id, email, initial_scan_completed
                FROM scraper_configs WHERE user_id = ? ORDER BY rowid""",
                (user_id,)
            )
            return [
                WatchConfig.from_document(user_id, row[0], {
                    "url": row[1],
                    "keyword": row[2],
                    "telegramId": row[3],
                    "email": row[4],
                    INITIAL_SCAN_FIELD: bool(row[5]),
                })
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def mark_initial_scan_completed(self, watch_config):
        conn = sqlite3.connect(self.db_path)
        try:
            cursor = conn.execute(
                """UPDATE scraper_configs SET initial_scan_completed = 1
                WHERE user_id = ? AND config_id = ?""",
                (watch_config.user_id, watch_config.config_id)
            )
            if cursor.rowcount == 0:
                raise LookupError(
                    f"No config {watch_config.config_id} for user {watch_config.user_id}")
            conn.commit()
            logger.debug("Marked initial scan completed: %s/%s",
                         watch_config.user_id, watch_config.config_id)
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


def create_store(config, credentials=None):
    """Create the config store selected by configuration."""
    if config.STORE_BACKEND == "sqlite":
        return SqliteConfigStore(config.DATABASE_PATH)
    if config.STORE_BACKEND == "firestore":
        return FirestoreConfigStore(credentials, config.APP_ID)
    raise ValueError(f"Unknown store backend: {config.STORE_BACKEND}")

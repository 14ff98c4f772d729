"""Configuration settings module."""
import base64
import binascii
import json
import os
from collections import namedtuple
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()

# Invalid settings found while loading; checked at startup
CONFIG_ERRORS = []


def _number_env(name, default, cast):
    """Read a numeric setting, falling back to the default if it is malformed."""
    raw = os.environ.get(name, default)
    try:
        return cast(raw)
    except ValueError:
        CONFIG_ERRORS.append(f"{name} must be a number, got {raw!r}")
        return cast(default)


# Application namespace in the document store
APP_ID = "default-app-id"

# Document store
STORE_BACKEND = os.environ.get("STORE_BACKEND", "firestore").lower()
FIREBASE_CREDENTIALS = os.environ.get("FIREBASE_CREDENTIALS")
DATABASE_PATH = os.environ.get("DATABASE_PATH", "data/board_watcher.db")

# Telegram notifications
TELEGRAM_BOT_TOKEN = os.environ.get("TELEGRAM_BOT_TOKEN")
TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"
TELEGRAM_TIMEOUT = _number_env("TELEGRAM_TIMEOUT", "10", int)

# Detection
DETECTOR = os.environ.get("DETECTOR", "simulation").lower()
NEW_POST_PROBABILITY = _number_env("NEW_POST_PROBABILITY", "0.1", float)

# Logging
LOG_DIR = os.environ.get("LOG_DIR", "")
DEBUG = os.environ.get("DEBUG", "false").lower() == "true"


CredentialResult = namedtuple("CredentialResult", ["credentials", "error"])


def load_store_credentials(encoded):
    """Decode the base64 service account blob.

    Returns a CredentialResult holding either the decoded dict or an error
    message, never both.
    """
    if not encoded:
        return CredentialResult(None, "FIREBASE_CREDENTIALS is not set")

    try:
        raw = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        return CredentialResult(None, f"FIREBASE_CREDENTIALS is not valid base64: {e}")

    try:
        credentials = json.loads(raw)
    except json.JSONDecodeError as e:
        return CredentialResult(None, f"FIREBASE_CREDENTIALS is not valid JSON: {e}")

    if not isinstance(credentials, dict):
        return CredentialResult(None, "FIREBASE_CREDENTIALS must decode to a JSON object")

    return CredentialResult(credentials, None)

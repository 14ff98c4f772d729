"""Data types shared by the watcher components."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScanMode(Enum):
    INITIAL = "initial"
    INCREMENTAL = "new"


@dataclass
class WatchConfig:
    """One watched board and keyword belonging to a single user."""

    user_id: str
    config_id: str
    url: str = ""
    keyword: str = ""
    telegram_destination: Optional[str] = None
    email_destination: Optional[str] = None
    initial_scan_completed: bool = False

    @classmethod
    def from_document(cls, user_id, config_id, data):
        """Build a config from a stored document's fields."""
        telegram_id = data.get("telegramId")
        return cls(
            user_id=user_id,
            config_id=config_id,
            url=data.get("url") or "",
            keyword=data.get("keyword") or "",
            telegram_destination=str(telegram_id) if telegram_id else None,
            email_destination=data.get("email") or None,
            initial_scan_completed=bool(data.get("lastInitialScrapeCompleted", False)),
        )

    def label(self):
        return f"{self.url} ({self.keyword})"


@dataclass
class DetectionResult:
    found: bool = False
    match_count: int = 0


@dataclass
class SweepReport:
    total_alerts_attempted: int = 0
    users_checked: int = 0
    configs_checked: int = 0
    aborted: bool = False
    error: Optional[str] = None

"""Notification service for sending keyword alerts."""
import logging
import requests

from .models import ScanMode

logger = logging.getLogger(__name__)

TELEGRAM = "telegram"
EMAIL = "email"

INITIAL_MESSAGE = """
*✅ 초기 스캔 완료*
---------------------------------
'{keyword}' 키워드로 '{url}'을(를) 스캔했습니다.

*최근 2개월간 {count}개의 관련 글을 찾았습니다.* (시뮬레이션)

이제부터 이 게시판에서 해당 키워드의 새 글이 올라오면 알려드립니다.
"""

NEW_POST_MESSAGE = """
*🔔 새로운 게시글이 올라옴!*
---------------------------------
[알림] '{keyword}' 키워드가 감지되었습니다.

게시판 주소: {url}

해당 링크를 확인해 보세요.
"""


MARKDOWN_SPECIAL = ("_", "*", "[", "`")


def escape_markdown(text):
    """Escape characters that legacy Telegram Markdown treats as markup."""
    for char in MARKDOWN_SPECIAL:
        text = text.replace(char, "\\" + char)
    return text


def format_message(watch_config, mode, match_count=0):
    """Build the alert text for a scan mode."""
    keyword = escape_markdown(watch_config.keyword)
    url = escape_markdown(watch_config.url)
    if mode is ScanMode.INITIAL:
        return INITIAL_MESSAGE.format(keyword=keyword, url=url, count=match_count)
    return NEW_POST_MESSAGE.format(keyword=keyword, url=url)


class NotificationService:
    """Handles sending notifications through the configured channels."""

    def __init__(self, config, session=None):
        """Initialize the notification service with configuration."""
        self.config = config
        self.session = session

        if not self.config.TELEGRAM_BOT_TOKEN:
            logger.warning(
                "TELEGRAM_BOT_TOKEN is not set - Telegram alerts will be skipped")

    def dispatch(self, channel, destination, watch_config, mode, match_count=0):
        """Send one alert through one channel. Never raises."""
        try:
            if channel == TELEGRAM:
                self.send_telegram_notification(
                    destination, watch_config, mode, match_count)
            elif channel == EMAIL:
                self.send_email_notification(destination, watch_config, mode)
            else:
                logger.error("Unknown notification channel: %s", channel)
        except Exception as e:
            logger.error("Unexpected error dispatching %s alert to %s: %s",
                         channel, destination, e)

    def send_telegram_notification(self, chat_id, watch_config, mode, match_count=0):
        """Send an alert message through the Telegram Bot API."""
        if not self.config.TELEGRAM_BOT_TOKEN:
            logger.info("No Telegram token, skipping alert for chat %s", chat_id)
            return False

        url = self.config.TELEGRAM_API_URL.format(token=self.config.TELEGRAM_BOT_TOKEN)
        payload = {
            "chat_id": chat_id,
            "text": format_message(watch_config, mode, match_count),
            "parse_mode": "Markdown",
        }

        try:
            post = self.session.post if self.session is not None else requests.post
            response = post(url, json=payload, timeout=self.config.TELEGRAM_TIMEOUT)
            if 200 <= response.status_code < 300:
                logger.info("Sent Telegram alert to chat %s (type: %s)",
                            chat_id, mode.value)
                return True
            else:
                logger.error(
                    "Failed to send Telegram alert to chat %s. Status code: %s, Response: %s",
                    chat_id, response.status_code, response.text)
                return False
        except requests.RequestException as e:
            logger.error("Error sending Telegram alert to chat %s: %s", chat_id, e)
            return False

    def send_email_notification(self, email, watch_config, mode):
        """Log the email alert that would be sent.

        No mail provider is wired up yet, so this only records the attempt.
        """
        logger.info("[email stub] Would send %s alert for %s to %s",
                    mode.value, watch_config.label(), email)
        return True

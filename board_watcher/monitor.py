"""Sweep over every user's watch configs."""
import logging
import traceback

from .models import ScanMode, SweepReport
from .notifier import EMAIL, TELEGRAM

logger = logging.getLogger(__name__)


class BoardMonitor:
    """Checks each stored watch config once and sends the resulting alerts."""

    def __init__(self, config, store, notifier, detector):
        """Initialize the monitor with configuration and its collaborators."""
        self.config = config
        self.store = store
        self.notifier = notifier
        self.detector = detector

    def run_sweep(self):
        """Check every config of every user once.

        A failure listing users or configs aborts the sweep; everything else
        is logged and the sweep moves on to the next config.
        """
        report = SweepReport()
        logger.info("Starting keyword sweep (app id: %s)", self.config.APP_ID)

        try:
            for user_id in self.store.list_users():
                report.users_checked += 1
                configs = self.store.list_configs(user_id)

                if not configs:
                    logger.info("User %s has no saved configs, skipping", user_id)
                    continue

                logger.info("Checking %d configs for user %s", len(configs), user_id)
                for watch_config in configs:
                    report.configs_checked += 1
                    report.total_alerts_attempted += self.check_config(watch_config)
        except Exception as e:
            logger.error("Sweep aborted while reading configs: %s", e)
            logger.debug(traceback.format_exc())
            report.aborted = True
            report.error = str(e)

        logger.info("Keyword sweep finished. %d alerts attempted.",
                    report.total_alerts_attempted)
        return report

    def check_config(self, watch_config):
        """Scan one config and return the number of dispatches attempted."""
        if not watch_config.initial_scan_completed:
            return self._initial_scan(watch_config)
        return self._incremental_scan(watch_config)

    def _detect(self, watch_config, mode):
        try:
            return self.detector.detect(watch_config, mode)
        except Exception as e:
            logger.error("Detection failed for %s: %s", watch_config.label(), e)
            logger.debug(traceback.format_exc())
            return None

    def _initial_scan(self, watch_config):
        logger.info("Running initial scan: %s", watch_config.label())
        result = self._detect(watch_config, ScanMode.INITIAL)

        alerts = 0
        if result is not None and result.match_count > 0 and watch_config.telegram_destination:
            self.notifier.dispatch(TELEGRAM, watch_config.telegram_destination,
                                   watch_config, ScanMode.INITIAL, result.match_count)
            alerts += 1

        try:
            self.store.mark_initial_scan_completed(watch_config)
            watch_config.initial_scan_completed = True
        except Exception as e:
            logger.error("Failed to save initial scan flag for %s/%s: %s",
                         watch_config.user_id, watch_config.config_id, e)
            logger.debug(traceback.format_exc())

        return alerts

    def _incremental_scan(self, watch_config):
        result = self._detect(watch_config, ScanMode.INCREMENTAL)
        if result is None:
            return 0

        if not result.found:
            logger.info("No new post: %s", watch_config.label())
            return 0

        logger.info("New post detected: %s", watch_config.label())
        alerts = 0
        if watch_config.telegram_destination:
            self.notifier.dispatch(TELEGRAM, watch_config.telegram_destination,
                                   watch_config, ScanMode.INCREMENTAL)
            alerts += 1
        if watch_config.email_destination:
            self.notifier.dispatch(EMAIL, watch_config.email_destination,
                                   watch_config, ScanMode.INCREMENTAL)
            alerts += 1
        return alerts

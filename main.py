"""Application entry point."""
import logging
import os
import sys
from board_watcher import config
from board_watcher.detector import create_detector
from board_watcher.monitor import BoardMonitor
from board_watcher.notifier import NotificationService
from board_watcher.state_manager import create_store


def setup_logging():
    """Set up logging configuration."""
    log_level = logging.DEBUG if config.DEBUG else logging.INFO

    handlers = [logging.StreamHandler()]
    if config.LOG_DIR:
        if not os.path.exists(config.LOG_DIR):
            os.makedirs(config.LOG_DIR)
        handlers.append(logging.FileHandler(f'{config.LOG_DIR}/board_watcher.log'))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def main():
    """Main entry point for the application."""
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("Initializing board watcher")

    if config.CONFIG_ERRORS:
        for error in config.CONFIG_ERRORS:
            logger.error("Invalid configuration: %s", error)
        sys.exit(1)

    credentials = None
    if config.STORE_BACKEND == "firestore":
        result = config.load_store_credentials(config.FIREBASE_CREDENTIALS)
        if result.error:
            logger.error("%s. Exiting.", result.error)
            sys.exit(1)
        credentials = result.credentials

    try:
        store = create_store(config, credentials)
        detector = create_detector(config)
    except Exception as e:
        logger.error("Failed to initialize watcher: %s", e)
        sys.exit(1)

    monitor = BoardMonitor(config, store, NotificationService(config), detector)
    report = monitor.run_sweep()

    if report.aborted:
        logger.error("Sweep ended early: %s", report.error)
    logger.info("Checked %d configs across %d users, %d alerts attempted",
                report.configs_checked, report.users_checked,
                report.total_alerts_attempted)


if __name__ == "__main__":
    main()

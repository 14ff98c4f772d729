"""
A job that checks user-defined board and keyword pairs
and sends alerts when matching posts appear.
"""

from . import config
from .monitor import BoardMonitor
from .notifier import NotificationService
from .state_manager import ConfigStore, FirestoreConfigStore, SqliteConfigStore
from .detector import Detector, KeywordDetector, SimulationDetector

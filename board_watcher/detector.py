"""Detection of matching posts on a watched board.

No real crawling happens here yet. The detectors below are placeholders that
keep the interface stable until a fetcher for actual board pages exists.
"""
import logging
import random

from .models import DetectionResult, ScanMode

logger = logging.getLogger(__name__)

MARKER_KEYWORDS = ("특별공급", "맑은")


def keyword_has_marker(keyword):
    """Return True if the keyword contains one of the marker substrings."""
    if not keyword:
        return False
    return any(marker in keyword for marker in MARKER_KEYWORDS)


class Detector:
    """Base class for anything that can check a board for a keyword."""

    def detect(self, watch_config, mode):
        raise NotImplementedError


class SimulationDetector(Detector):
    """Randomized stand-in for a crawler.

    Initial scans report 3 to 7 matches when the keyword carries a marker.
    Incremental scans find a new post with a fixed probability, whatever the
    keyword.
    """

    def __init__(self, new_post_probability=0.1, rng=None):
        self.new_post_probability = new_post_probability
        self.rng = rng or random.Random()

    def detect(self, watch_config, mode):
        if mode is ScanMode.INITIAL:
            count = 0
            if keyword_has_marker(watch_config.keyword):
                count = self.rng.randint(3, 7)
            logger.debug("Simulated initial scan of %s: %d matches",
                         watch_config.url, count)
            return DetectionResult(found=count > 0, match_count=count)

        found = self.rng.random() < self.new_post_probability
        return DetectionResult(found=found, match_count=1 if found else 0)


class KeywordDetector(Detector):
    """Deterministic stand-in: a match iff the keyword carries a marker."""

    def detect(self, watch_config, mode):
        found = keyword_has_marker(watch_config.keyword)
        return DetectionResult(found=found, match_count=1 if found else 0)


def create_detector(config):
    """Create the detector selected by configuration."""
    if config.DETECTOR == "keyword":
        return KeywordDetector()
    if config.DETECTOR == "simulation":
        return SimulationDetector(config.NEW_POST_PROBABILITY)
    raise ValueError(f"Unknown detector: {config.DETECTOR}")

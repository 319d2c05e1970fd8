"""
Logging utilities for swipe gestures.
"""

import datetime
import logging
from typing import List

from ..utils.gesture_utils import PointerSample

logger = logging.getLogger(__name__)

class TouchLogger:
    """Handles logging of recognised swipes."""

    def __init__(self, debug_file: str = 'swipe_debug.log'):
        self.debug_file = None
        try:
            self.debug_file = open(debug_file, 'w')
            self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
            self.debug_file.flush()
        except OSError as e:
            logger.warning(f"Could not open debug file: {e}")

    @staticmethod
    def _timestamp() -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def log_swipe(self, pointers: List[PointerSample]):
        """Log a recognised three finger swipe."""
        timestamp = self._timestamp()

        print(f"[{timestamp}] 📸 THREE FINGER SWIPE: {len(pointers)} finger(s)")
        for i, pointer in enumerate(pointers):
            print(f"   Finger {i+1}: ({int(pointer.x)}, {int(pointer.y)})")

        self._write(f"[{timestamp}] swipe pointers={pointers}")

    def _write(self, message: str):
        if self.debug_file:
            try:
                self.debug_file.write(message + "\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None

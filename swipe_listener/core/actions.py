"""
Actions run when a three finger swipe is recognised.
"""

import logging
import subprocess
from typing import List, Optional

from ..config.settings import SwipeConfig

logger = logging.getLogger(__name__)


class ScreenshotAction:
    """Takes a screenshot by running an external command."""

    def __init__(self, command: Optional[List[str]] = None, timeout: Optional[float] = None):
        self.command = list(command) if command is not None else list(SwipeConfig.SCREENSHOT_COMMAND)
        self.timeout = timeout if timeout is not None else SwipeConfig.SCREENSHOT_TIMEOUT_S

    def on_swipe_three_finger(self):
        logger.info(f"Taking screenshot: {' '.join(self.command)}")
        try:
            result = subprocess.run(self.command, capture_output=True, text=True,
                                    timeout=self.timeout)
        except FileNotFoundError:
            logger.error(f"Screenshot command not found: {self.command[0]}")
            return False
        except subprocess.TimeoutExpired:
            logger.error(f"Screenshot command timed out after {self.timeout}s")
            return False

        if result.returncode != 0:
            logger.error(f"Screenshot command failed ({result.returncode}): {result.stderr.strip()}")
            return False
        return True

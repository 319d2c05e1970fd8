"""
Swipe Listener Package
Three finger swipe-to-screenshot detection for multitouch screens.
"""

from .core.listener import TouchListener
from .gestures.swipe_detector import ThreeFingerSwipeDetector
from .device.device_manager import DeviceManager

__version__ = "1.0.0"
__all__ = ["TouchListener", "ThreeFingerSwipeDetector", "DeviceManager"]

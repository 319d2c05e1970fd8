"""
Gesture detection.

This module provides the three finger swipe detector and the types
it exchanges with its host.
"""

from .swipe_detector import (
    ActivitySinkError,
    DisplayMetrics,
    GestureState,
    ThreeFingerSwipeDetector
)

__all__ = [
    'ActivitySinkError',
    'DisplayMetrics',
    'GestureState',
    'ThreeFingerSwipeDetector'
]

"""
Utilities package for pointer frames, readiness queries and logging.
"""

from .gesture_utils import (
    MotionPhase,
    PointerSample,
    EventFrame,
    GeometryUtils
)

__all__ = [
    'MotionPhase',
    'PointerSample',
    'EventFrame',
    'GeometryUtils'
]

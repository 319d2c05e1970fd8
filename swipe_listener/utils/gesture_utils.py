"""
Shared data types and geometry helpers for pointer event frames.

The frame model mirrors what a touchscreen reports at one instant: every
finger currently in contact, the phase of the overall gesture and the
times needed to reason about how long the gesture has been running.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class MotionPhase(Enum):
    """Phase of the multi-touch gesture carried by a frame."""

    DOWN = 'down'
    POINTER_DOWN = 'pointer_down'
    MOVE = 'move'
    POINTER_UP = 'pointer_up'
    UP = 'up'
    CANCEL = 'cancel'


@dataclass(frozen=True)
class PointerSample:
    """One touch contact inside a frame."""

    pointer_id: int
    x: float
    y: float


@dataclass
class EventFrame:
    """All concurrently active pointers at one instant."""

    phase: MotionPhase
    pointers: List[PointerSample] = field(default_factory=list)
    event_time: float = 0.0
    down_time: float = 0.0

    @property
    def pointer_count(self) -> int:
        return len(self.pointers)

    def find_pointer_index(self, pointer_id: int) -> int:
        """Return the index of ``pointer_id`` in this frame, or -1."""
        for index, pointer in enumerate(self.pointers):
            if pointer.pointer_id == pointer_id:
                return index
        return -1

    def get_y(self, index: int) -> float:
        return self.pointers[index].y

    @property
    def elapsed_since_down(self) -> float:
        return self.event_time - self.down_time


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def get_bounds(pointers: List[PointerSample]) -> Tuple[float, float, float, float]:
        """Get bounding box (min_x, max_x, min_y, max_y) of a set of pointers."""
        if not pointers:
            return 0.0, 0.0, 0.0, 0.0

        min_x = min(p.x for p in pointers)
        max_x = max(p.x for p in pointers)
        min_y = min(p.y for p in pointers)
        max_y = max(p.y for p in pointers)

        return min_x, max_x, min_y, max_y

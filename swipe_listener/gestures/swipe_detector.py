"""
Three finger swipe detection.

Recognises three fingers placed close together and dragged down the
screen, the gesture used to take a screenshot. The detector is fed one
EventFrame per input report and reports back through two collaborators:
a callbacks object told when the swipe is recognised, and an activity
sink told whether a swipe is currently being tracked so the host can
hold back competing gestures.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol

from ..config.settings import SwipeConfig
from ..utils.gesture_utils import EventFrame, GeometryUtils, MotionPhase

logger = logging.getLogger(__name__)


class ActivitySinkError(Exception):
    """Raised by an activity sink when the host facility is unreachable."""


class GestureState(Enum):
    NONE = 0
    DETECTING = 1
    DETECTED_FALSE = 2
    DETECTED_TRUE = 3
    NO_DETECT = 4


@dataclass(frozen=True)
class DisplayMetrics:
    density: float
    width_pixels: int
    height_pixels: int


class SwipeCallbacks(Protocol):
    def on_swipe_three_finger(self) -> None: ...


class ActivitySink(Protocol):
    def set_swipe_gesture_active(self, active: bool) -> None: ...


def _always_ready() -> bool:
    return True


class ThreeFingerSwipeDetector:
    """Detects a three finger downward swipe from a stream of event frames."""

    ACTIVE_STATES = (GestureState.DETECTING, GestureState.DETECTED_TRUE)

    def __init__(self, metrics: DisplayMetrics, callbacks: SwipeCallbacks,
                 activity_sink: Optional[ActivitySink] = None,
                 boot_completed: Callable[[], bool] = _always_ready,
                 device_provisioned: Callable[[], bool] = _always_ready):
        self.metrics = metrics
        self.callbacks = callbacks
        self.config = SwipeConfig()

        self._activity_sink = activity_sink
        self._boot_completed_query = boot_completed
        self._device_provisioned_query = device_provisioned
        self._boot_completed = False
        self._device_provisioned = False

        self._state = GestureState.NONE
        self._tracked_pointers: Dict[int, float] = {}

        self.edge_threshold = int(self.config.EDGE_THRESHOLD_DP * metrics.density)
        self.gesture_threshold = self.edge_threshold * self.config.GESTURE_THRESHOLD_MULTIPLIER

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def tracked_pointers(self) -> Dict[int, float]:
        """Tracked pointer id -> initial Y, empty unless detecting."""
        return dict(self._tracked_pointers)

    def on_event(self, frame: EventFrame):
        """Process one input frame."""
        if not self._is_ready():
            return

        required = self.config.REQUIRED_POINTERS

        if frame.phase == MotionPhase.DOWN:
            self._change_state(GestureState.NONE)
        elif self._state == GestureState.NONE and frame.pointer_count == required:
            if self.check_is_start_three_gesture(frame):
                self._change_state(GestureState.DETECTING)
                self._tracked_pointers = {
                    p.pointer_id: p.y for p in frame.pointers[:required]
                }
            else:
                self._change_state(GestureState.NO_DETECT)

        if self._state != GestureState.DETECTING:
            return

        if frame.pointer_count != required:
            self._change_state(GestureState.DETECTED_FALSE)
            return

        if frame.phase == MotionPhase.MOVE:
            distance = 0.0
            for pointer_id, initial_y in self._tracked_pointers.items():
                index = frame.find_pointer_index(pointer_id)
                if index < 0 or index >= required:
                    self._change_state(GestureState.DETECTED_FALSE)
                    return
                distance += frame.get_y(index) - initial_y

            if distance >= self.gesture_threshold:
                self._change_state(GestureState.DETECTED_TRUE)
                self.callbacks.on_swipe_three_finger()

    def _is_ready(self) -> bool:
        # Each flag latches once true and is never queried again. The frame
        # that latches a flag is still dropped.
        if not self._boot_completed:
            self._boot_completed = bool(self._boot_completed_query())
            return False
        if not self._device_provisioned:
            self._device_provisioned = bool(self._device_provisioned_query())
            return False
        return True

    def check_is_start_three_gesture(self, frame: EventFrame) -> bool:
        """Check whether the fingers in ``frame`` may start a swipe."""
        if frame.elapsed_since_down > self.config.START_GESTURE_TIMEOUT_MS:
            return False

        height = self.metrics.height_pixels
        width = self.metrics.width_pixels

        # The bottom edge belongs to other system gestures
        for pointer in frame.pointers:
            if pointer.y > height - self.edge_threshold:
                return False

        min_x, max_x, min_y, max_y = GeometryUtils.get_bounds(frame.pointers)

        max_vertical_spread = self.metrics.density * self.config.MAX_VERTICAL_SPREAD_DP
        return (max_y - min_y <= max_vertical_spread and
                max_x - min_x <= min(width, height))

    def cleanup(self):
        """Release the activity sink."""
        self._activity_sink = None

    def _change_state(self, state: GestureState):
        if self._state == state:
            return

        logger.debug(f"Swipe state {self._state.name} -> {state.name}")
        self._state = state
        if state != GestureState.DETECTING:
            self._tracked_pointers = {}

        if self._activity_sink is None:
            return

        should_enable = state in self.ACTIVE_STATES
        try:
            self._activity_sink.set_swipe_gesture_active(should_enable)
        except (ActivitySinkError, OSError) as e:
            logger.error(f"set_swipe_gesture_active({should_enable}) failed: {e}", exc_info=True)

"""
Builds EventFrames from raw evdev multitouch reports.

The kernel reports multitouch state as a series of per-slot updates
terminated by SYN_REPORT. Each report is folded into one frame carrying
every finger in contact and the phase of the overall gesture.
"""

import logging
from typing import Dict, List, Optional

from evdev import ecodes

from ..utils.gesture_utils import EventFrame, MotionPhase, PointerSample

logger = logging.getLogger(__name__)


class FrameBuilder:
    """Folds evdev events into EventFrames, one per SYN_REPORT."""

    def __init__(self):
        self.current_slot = 0
        self.slot_data = {}  # slot -> {'id', 'x', 'y'}
        # The kernel keeps per-slot axis values across contacts and only
        # reports changes, so a new contact starts from the slot's last position
        self.slot_positions = {}  # slot -> {'x', 'y'}
        self.down_time = 0.0

        # Slots placed or lifted since the last report
        self._placed = set()
        self._lifted = {}  # slot -> last known slot data
        self._dropped = False

    def feed(self, ev) -> Optional[EventFrame]:
        """Feed one event; returns a frame when a report completes."""
        if ev.type == ecodes.EV_ABS:
            self._handle_abs_event(ev)
        elif ev.type == ecodes.EV_SYN:
            if ev.code == ecodes.SYN_DROPPED:
                self._dropped = True
            elif ev.code == ecodes.SYN_REPORT:
                return self._build_frame(ev.sec * 1000 + ev.usec / 1000)
        return None

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate events."""
        if self._dropped:
            return

        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            self._handle_tracking_id(ev.value)
        elif ev.code == ecodes.ABS_MT_POSITION_X:
            self._handle_position('x', ev.value)
        elif ev.code == ecodes.ABS_MT_POSITION_Y:
            self._handle_position('y', ev.value)

    def _handle_position(self, axis: str, value: int):
        slot = self.current_slot
        self.slot_positions.setdefault(slot, {'x': 0, 'y': 0})[axis] = value
        if slot in self.slot_data:
            self.slot_data[slot][axis] = value

    def _handle_tracking_id(self, value: int):
        slot = self.current_slot

        if value == -1:
            # Finger lifted
            data = self.slot_data.pop(slot, None)
            if data is not None:
                self._placed.discard(slot)
                self._lifted[slot] = data
        else:
            # Finger placed
            position = self.slot_positions.get(slot, {'x': 0, 'y': 0})
            self.slot_data[slot] = {'id': value, 'x': position['x'], 'y': position['y']}
            self._placed.add(slot)

    def _build_frame(self, event_time: float) -> Optional[EventFrame]:
        if self._dropped:
            return self._cancel(event_time)

        placed = self._placed
        lifted = self._lifted
        self._placed = set()
        self._lifted = {}

        if not self.slot_data and not lifted:
            return None

        pointers = self._pointers({**lifted, **self.slot_data})

        if placed and len(placed) == len(self.slot_data) and not lifted:
            self.down_time = event_time
            phase = MotionPhase.DOWN
        elif placed:
            phase = MotionPhase.POINTER_DOWN
        elif lifted and not self.slot_data:
            phase = MotionPhase.UP
        elif lifted:
            phase = MotionPhase.POINTER_UP
        else:
            phase = MotionPhase.MOVE

        return EventFrame(phase, pointers, event_time, self.down_time)

    def _cancel(self, event_time: float) -> Optional[EventFrame]:
        logger.warning("Input events dropped, cancelling current gesture")
        live = {**self._lifted, **self.slot_data}
        self.slot_data.clear()
        self._placed = set()
        self._lifted = {}
        self._dropped = False

        if not live:
            return None
        return EventFrame(MotionPhase.CANCEL, self._pointers(live), event_time, self.down_time)

    @staticmethod
    def _pointers(slots: Dict[int, Dict]) -> List[PointerSample]:
        return [
            PointerSample(data['id'], float(data['x']), float(data['y']))
            for _, data in sorted(slots.items())
        ]

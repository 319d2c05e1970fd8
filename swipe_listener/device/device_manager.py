"""
Device management for touchscreen discovery and initialization.
"""

import evdev
from evdev import InputDevice, ecodes
import logging

from ..config.settings import SwipeConfig
from ..gestures.swipe_detector import ActivitySinkError, DisplayMetrics

logger = logging.getLogger(__name__)

class DeviceManager:
    """Manages touchscreen device discovery and initialization."""

    def __init__(self):
        self.device = None
        self.screen_width = SwipeConfig.DEFAULT_SCREEN_WIDTH
        self.screen_height = SwipeConfig.DEFAULT_SCREEN_HEIGHT
        self.density = SwipeConfig.DEFAULT_DENSITY

    def find_device(self):
        """Find and configure the touchscreen device."""
        devices = [evdev.InputDevice(path) for path in evdev.list_devices()]

        for device in devices:
            caps = device.capabilities()
            if ecodes.EV_ABS in caps:
                # Check for multitouch capabilities
                abs_caps = caps.get(ecodes.EV_ABS, [])
                abs_codes = [code for code, _ in abs_caps]

                # Look for multitouch slots
                if ecodes.ABS_MT_SLOT in abs_codes:
                    self._read_screen_info({code: info for code, info in abs_caps})
                    self.device = device
                    logger.info(f"Found touchscreen: {device.name}")
                    logger.info(f"Screen resolution: {self.screen_width}x{self.screen_height}, "
                                f"density {self.density:.2f}")
                    return device

        logger.error("No touchscreen device found")
        return None

    def _read_screen_info(self, abs_info):
        """Read screen size and density from the multitouch axes."""
        if ecodes.ABS_MT_POSITION_X in abs_info:
            x_info = abs_info[ecodes.ABS_MT_POSITION_X]
            self.screen_width = x_info.max + 1
            # Resolution is reported in units per millimetre
            if x_info.resolution > 0:
                dpi = x_info.resolution * SwipeConfig.MM_PER_INCH
                self.density = dpi / SwipeConfig.MDPI_DPI
        if ecodes.ABS_MT_POSITION_Y in abs_info:
            self.screen_height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1

    def get_device_info(self):
        """Get screen information."""
        return {
            'screen_width': self.screen_width,
            'screen_height': self.screen_height,
            'density': self.density
        }

    def get_display_metrics(self) -> DisplayMetrics:
        return DisplayMetrics(self.density, self.screen_width, self.screen_height)


class DeviceGrabSink:
    """Activity sink that grabs the touchscreen while a swipe is tracked.

    Holding an exclusive grab keeps other readers of the device from
    acting on the same touches as a competing gesture.
    """

    def __init__(self, device: InputDevice):
        self.device = device
        self.grabbed = False

    def set_swipe_gesture_active(self, active: bool):
        if active == self.grabbed:
            return
        try:
            if active:
                self.device.grab()
            else:
                self.device.ungrab()
        except OSError as e:
            raise ActivitySinkError(f"{'grab' if active else 'ungrab'} failed on {self.device.path}: {e}") from e
        self.grabbed = active

    def release(self):
        """Drop the grab if it is still held."""
        if self.grabbed:
            try:
                self.set_swipe_gesture_active(False)
            except ActivitySinkError as e:
                logger.warning(f"Could not release touchscreen grab: {e}")

"""
Main touchscreen listener class that coordinates device management and swipe detection.
"""

import threading
import logging
from typing import Dict, Optional

from ..config.settings import SwipeConfig
from ..device.device_manager import DeviceManager, DeviceGrabSink
from ..gestures.swipe_detector import ThreeFingerSwipeDetector
from ..utils.gesture_utils import EventFrame
from ..utils.logger import TouchLogger
from ..utils.system_flags import boot_completed_query, device_provisioned_query
from .actions import ScreenshotAction
from .frames import FrameBuilder

logger = logging.getLogger(__name__)

class TouchListener:
    """Main touchscreen listener that feeds touchscreen frames to the swipe detector."""

    def __init__(self, action=None, config: Optional[SwipeConfig] = None):
        self.config = config or SwipeConfig()
        self.device_manager = DeviceManager()
        self.frame_builder = FrameBuilder()
        self.action = action or ScreenshotAction(self.config.SCREENSHOT_COMMAND,
                                                 self.config.SCREENSHOT_TIMEOUT_S)
        self.swipe_detector = None
        self.grab_sink = None
        self.logger = TouchLogger(self.config.DEBUG_LOG_FILE)

        # State management
        self.running = False
        self.last_frame: Optional[EventFrame] = None

        # Thread management
        self.thread = None
        self.action_thread = None
        self.state_lock = threading.Lock()

    def start(self) -> bool:
        """Start the touchscreen listener."""
        device = self.device_manager.find_device()
        if not device:
            print("❌ No touchscreen found")
            return False

        self.grab_sink = DeviceGrabSink(device)
        self.swipe_detector = ThreeFingerSwipeDetector(
            self.device_manager.get_display_metrics(),
            self,
            activity_sink=self.grab_sink,
            boot_completed=boot_completed_query(self.config),
            device_provisioned=device_provisioned_query(self.config)
        )

        self.running = True
        self._print_startup_info(self.device_manager.get_device_info())

        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()

        return True

    def stop(self):
        """Stop the touchscreen listener."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1)
        if self.action_thread:
            self.action_thread.join(timeout=self.config.SCREENSHOT_TIMEOUT_S)
        with self.state_lock:
            if self.grab_sink:
                self.grab_sink.release()
            if self.swipe_detector:
                self.swipe_detector.cleanup()
        self.logger.close()

    def _print_startup_info(self, device_info: Dict):
        """Print startup information."""
        print(f"✅ Found: {self.device_manager.device.name}")
        print(f"📺 Screen: {device_info['screen_width']}x{device_info['screen_height']}")
        print(f"📏 Density: {device_info['density']:.2f}")
        print(f"📏 Bottom edge margin: {self.swipe_detector.edge_threshold}px")
        print(f"📏 Swipe threshold: {self.swipe_detector.gesture_threshold}px (summed over 3 fingers)")
        print("🎯 Ready! Swipe down with three fingers to take a screenshot!")

    def _event_loop(self):
        """Main event processing loop."""
        try:
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break

                frame = self.frame_builder.feed(event)
                if frame is not None:
                    with self.state_lock:
                        self.process_frame(frame)

        except KeyboardInterrupt:
            pass
        except Exception as e:
            logger.error(f"Error in event loop: {e}")

    def process_frame(self, frame: EventFrame):
        """Hand one frame to the swipe detector."""
        self.last_frame = frame
        self.swipe_detector.on_event(frame)

    def on_swipe_three_finger(self):
        """Called by the detector when a swipe is recognised."""
        if self.last_frame is not None:
            self.logger.log_swipe(self.last_frame.pointers)

        # Run off the read thread so input keeps flowing while the action runs
        self.action_thread = threading.Thread(target=self.action.on_swipe_three_finger)
        self.action_thread.daemon = True
        self.action_thread.start()

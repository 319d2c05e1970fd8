"""
Configuration settings for the swipe-to-screenshot listener.
"""

class SwipeConfig:
    """Configuration constants for three finger swipe recognition."""

    # Distance configurations (in density independent pixels)
    EDGE_THRESHOLD_DP = 50
    GESTURE_THRESHOLD_MULTIPLIER = 3
    MAX_VERTICAL_SPREAD_DP = 150

    # Timing configurations (in milliseconds)
    START_GESTURE_TIMEOUT_MS = 500

    # Finger count
    REQUIRED_POINTERS = 3

    # Display defaults, used when the device does not report them
    DEFAULT_SCREEN_WIDTH = 1920
    DEFAULT_SCREEN_HEIGHT = 1080
    DEFAULT_DENSITY = 1.0
    MDPI_DPI = 160
    MM_PER_INCH = 25.4

    # Readiness flag files (None means always ready)
    BOOT_COMPLETED_FLAG_FILE = None
    DEVICE_PROVISIONED_FLAG_FILE = None

    # Screenshot action
    SCREENSHOT_COMMAND = ['grim']
    SCREENSHOT_TIMEOUT_S = 5

    # Logging
    DEBUG_LOG_FILE = 'swipe_debug.log'

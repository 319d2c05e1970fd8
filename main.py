#!/usr/bin/env python3
"""
Swipe Listener - Main Entry Point
Takes a screenshot when three fingers swipe down the touchscreen.
"""

import logging
import time
from swipe_listener.core.listener import TouchListener

def main():
    """Main entry point for the swipe listener."""
    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    listener = TouchListener()
    
    if not listener.start():
        return
    
    try:
        while True:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()

if __name__ == "__main__":
    main()

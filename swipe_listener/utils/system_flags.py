"""
Readiness queries used to gate the swipe detector.

A query is a zero-argument callable returning True once the system
state it describes holds.
"""

import os
from typing import Callable, Optional


def flag_file_query(path: Optional[str]) -> Callable[[], bool]:
    """Return a query that is true once ``path`` exists.

    With no path configured the query is always true.
    """
    if path is None:
        return lambda: True

    def query() -> bool:
        return os.path.exists(path)

    return query


def boot_completed_query(config) -> Callable[[], bool]:
    return flag_file_query(config.BOOT_COMPLETED_FLAG_FILE)


def device_provisioned_query(config) -> Callable[[], bool]:
    return flag_file_query(config.DEVICE_PROVISIONED_FLAG_FILE)

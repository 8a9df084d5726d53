#!/usr/bin/env python3
"""
Dockmon - Errors Module
-----------
Exceptions raised by the stats core.
"""


class DockmonError(Exception):
    """Base class for all dockmon errors"""


class NoMemoryLimit(DockmonError, ZeroDivisionError):
    """Memory percent requested for a snapshot that reports a limit of 0"""

    def __init__(self, container_id):
        super().__init__(f"no memory limit configured for container {container_id}")
        self.container_id = container_id


class ContainerNotFound(DockmonError, LookupError):
    """Details index does not map to a tracked container"""

    def __init__(self, index):
        super().__init__(f"no container at index {index}")
        self.index = index

#!/usr/bin/env python3
"""
Dockmon - History Module
-----------
Bounded per-container snapshot buffers with deduplication and FIFO eviction.
"""
import logging
import threading
from collections import deque
from enum import Enum

logger = logging.getLogger(__name__)

MIN_CAPACITY = 1
DEFAULT_CAPACITY = 78  # 80 column terminal minus the panel borders


class Outcome(Enum):
    STORED = 'stored'
    DUPLICATE_IGNORED = 'duplicate_ignored'
    DISCARDED = 'discarded'


class HistoryStore:
    """Thread-safe map of container id to an ordered, bounded snapshot buffer.

    Every read hands back a tuple copy, so callers never see a buffer
    change while they iterate it.
    """

    def __init__(self, capacity=DEFAULT_CAPACITY):
        self._lock = threading.Lock()
        self._histories = {}
        self._capacity = max(MIN_CAPACITY, int(capacity))

    @property
    def capacity(self):
        with self._lock:
            return self._capacity

    def set_capacity(self, capacity):
        """Change the eviction bound; buffers are trimmed on their next append"""
        with self._lock:
            self._capacity = max(MIN_CAPACITY, int(capacity))

    def append(self, container_id, snapshot):
        """Append a snapshot, creating the container's history if needed"""
        with self._lock:
            history = self._histories.get(container_id)
            if history is None:
                history = deque()
                self._histories[container_id] = history

            # Same read timestamp means the daemon has not advanced
            if history and history[-1].read == snapshot.read:
                logger.debug("Duplicate snapshot for %s at %s", container_id, snapshot.read)
                return Outcome.DUPLICATE_IGNORED

            history.append(snapshot)
            while len(history) > self._capacity:
                history.popleft()
            return Outcome.STORED

    def ensure(self, container_id):
        """Create an empty history if none exists. Returns True when created"""
        with self._lock:
            if container_id in self._histories:
                return False
            self._histories[container_id] = deque()
            return True

    def evict(self, container_id):
        """Drop a container's entire history. Returns True if it existed"""
        with self._lock:
            return self._histories.pop(container_id, None) is not None

    def snapshots_for(self, container_id):
        with self._lock:
            return tuple(self._histories.get(container_id, ()))

    def snapshot_all(self):
        """Copy every buffer under a single lock acquisition"""
        with self._lock:
            return {cid: tuple(history) for cid, history in self._histories.items()}

    def container_ids(self):
        with self._lock:
            return list(self._histories)

    def __contains__(self, container_id):
        with self._lock:
            return container_id in self._histories

    def __len__(self):
        with self._lock:
            return len(self._histories)

#!/usr/bin/env python3
"""
Dockmon - Aggregation Engine
-----------
Single owner of the tracked container set. The stats collector pushes
snapshots in through ingest() and reconcile(); renderers pull derived
metrics out through view() and derived_view().

Index-to-container mapping for the details panel follows the order of the
last reconciled list and changes whenever that list does.
"""
import logging
import threading
from collections import namedtuple

from dockmon.core.errors import ContainerNotFound, NoMemoryLimit
from dockmon.core.history import DEFAULT_CAPACITY, HistoryStore, Outcome
from dockmon.core.metrics import RX, TX, cpu_series, memory_percent, network_series

logger = logging.getLogger(__name__)


class DerivedView(namedtuple('DerivedView', (
        'container_id',
        'cpu_percent_series',
        'memory_percent',
        'memory_limited',
        'memory_usage',
        'network_rx_series',
        'network_tx_series',
        'samples'))):
    __slots__ = ()

    @property
    def cpu_percent(self):
        """Most recent CPU percent, 0 until two snapshots exist"""
        return self.cpu_percent_series[-1] if self.cpu_percent_series else 0


EngineView = namedtuple('EngineView', ('container_ids', 'details_ids', 'views'))


def derive(container_id, snapshots):
    """Compute a DerivedView from an ordered snapshot sequence"""
    mem_pct = None
    mem_limited = True
    mem_usage = 0
    if snapshots:
        latest = snapshots[-1]
        mem_usage = latest.mem_usage
        try:
            mem_pct = memory_percent(latest)
        except NoMemoryLimit:
            mem_limited = False

    return DerivedView(
        container_id=container_id,
        cpu_percent_series=tuple(cpu_series(snapshots)),
        memory_percent=mem_pct,
        memory_limited=mem_limited,
        memory_usage=mem_usage,
        network_rx_series=tuple(network_series(snapshots, RX)),
        network_tx_series=tuple(network_series(snapshots, TX)),
        samples=len(snapshots),
    )


class AggregationEngine:
    def __init__(self, capacity=DEFAULT_CAPACITY):
        self.store = HistoryStore(capacity)
        self._lock = threading.Lock()
        # Order of the last reconciled list, used for index lookups
        self._reconciled = []
        # Tracked ids in first-seen order
        self._tracked = []
        self._closed = False

    def set_capacity(self, capacity):
        self.store.set_capacity(capacity)

    def reconcile(self, container_ids):
        """Sync tracked histories against the live container list.

        Returns the (added, removed) id lists. Calling twice with the same
        list changes nothing the second time.
        """
        live = list(dict.fromkeys(container_ids))
        live_set = set(live)
        with self._lock:
            removed = [cid for cid in self._tracked if cid not in live_set]
            for cid in removed:
                self.store.evict(cid)

            added = [cid for cid in live if self.store.ensure(cid)]
            self._tracked = [cid for cid in self._tracked if cid in live_set]
            self._tracked.extend(cid for cid in live if cid not in self._tracked)
            self._reconciled = live

        if added or removed:
            logger.info("Reconciled containers: %d added, %d removed", len(added), len(removed))
        return added, removed

    def ingest(self, container_id, snapshot):
        """Store a snapshot, late-creating the history of an untracked id"""
        with self._lock:
            if self._closed:
                return Outcome.DISCARDED
            if container_id not in self._tracked:
                logger.debug("Late-creating history for untracked container %s", container_id)
                self._tracked.append(container_id)
            return self.store.append(container_id, snapshot)

    def close(self):
        """Stop accepting snapshots; later ingests are discarded"""
        with self._lock:
            self._closed = True

    @property
    def closed(self):
        with self._lock:
            return self._closed

    def tracked_ids(self):
        with self._lock:
            return list(self._tracked)

    def derived_view(self, container_id):
        """Derived metrics for one container, computed fresh on every call.

        An untracked id yields an empty view.
        """
        return derive(container_id, self.store.snapshots_for(container_id))

    def selected_for_details(self, index):
        """Map an operator-typed index to a container id from the last reconcile"""
        with self._lock:
            if index < 0 or index >= len(self._reconciled):
                raise ContainerNotFound(index)
            return self._reconciled[index]

    def view(self):
        """Consistent snapshot of every tracked container's derived metrics"""
        with self._lock:
            container_ids = tuple(self._tracked)
            details_ids = tuple(self._reconciled)
            buffers = self.store.snapshot_all()
        views = {cid: derive(cid, buffers.get(cid, ())) for cid in container_ids}
        return EngineView(container_ids=container_ids, details_ids=details_ids, views=views)

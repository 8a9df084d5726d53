#!/usr/bin/env python3
"""
Dockmon - Metrics Module
-----------
Pure functions deriving CPU %, memory % and network deltas from snapshots.
None of these mutate their inputs, so they are safe to run on the copies
handed out by the history store while ingestion continues.
"""
from dockmon.core.errors import NoMemoryLimit

RX = 'rx'
TX = 'tx'


def cpu_percent(prev, cur):
    """CPU usage between two readings, as an integer percent.

    Uses the same formula as ``docker stats``. A stalled or reset counter
    reads as 0 rather than an error.
    """
    cpu_delta = cur.cpu_total - prev.cpu_total
    system_delta = cur.cpu_system - prev.cpu_system

    percent = 0.0
    if system_delta > 0 and cpu_delta > 0:
        percent = (cpu_delta / system_delta) * cur.online_cpus * 100.0
    return int(percent)


def memory_percent(snapshot):
    """Memory usage of the latest reading as an integer percent of its limit"""
    if snapshot.mem_limit == 0:
        raise NoMemoryLimit(snapshot.container_id)
    return snapshot.mem_usage * 100 // snapshot.mem_limit


def network_delta(prev, cur, direction):
    """Bytes moved between two readings; negative after a counter reset"""
    if direction == RX:
        return cur.rx_bytes - prev.rx_bytes
    if direction == TX:
        return cur.tx_bytes - prev.tx_bytes
    raise ValueError(f"unknown network direction: {direction!r}")


def pairwise_series(snapshots, derive):
    """Apply ``derive(prev, cur)`` to each adjacent pair, oldest first"""
    return [derive(snapshots[i - 1], snapshots[i]) for i in range(1, len(snapshots))]


def cpu_series(snapshots):
    return pairwise_series(snapshots, cpu_percent)


def network_series(snapshots, direction):
    return pairwise_series(snapshots, lambda prev, cur: network_delta(prev, cur, direction))

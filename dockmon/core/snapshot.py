#!/usr/bin/env python3
"""
Dockmon - Snapshot Module
-----------
Immutable per-container stats reading, built from a Docker stats document.
"""
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

_FIELDS = (
    'container_id',
    'read',
    'cpu_total',
    'cpu_system',
    'online_cpus',
    'mem_usage',
    'mem_limit',
    'rx_bytes',
    'tx_bytes',
)


class RawSnapshot(namedtuple('RawSnapshot', _FIELDS)):
    """One timestamped stats reading for one container.

    ``read`` is the daemon's read timestamp exactly as reported and is the
    deduplication key. CPU and network fields are cumulative counters,
    memory fields are gauges.
    """
    __slots__ = ()

    @classmethod
    def from_stats(cls, container_id, stats):
        """Build a snapshot from a decoded stats document, or None if malformed"""
        try:
            read = stats['read']
            cpu_stats = stats['cpu_stats']
            cpu_usage = cpu_stats['cpu_usage']
            cpu_total = int(cpu_usage['total_usage'])
            cpu_system = int(cpu_stats['system_cpu_usage'])
        except (KeyError, TypeError, ValueError):
            logger.debug("Malformed stats document for %s", container_id)
            return None

        # Per-cpu list is what older daemons report, cgroup v2 only has online_cpus
        percpu = cpu_usage.get('percpu_usage') or []
        online_cpus = len(percpu) or cpu_stats.get('online_cpus') or 1

        memory = stats.get('memory_stats') or {}
        mem_usage = int(memory.get('usage') or 0)
        mem_limit = int(memory.get('limit') or 0)

        # Sum every interface, fall back to the single legacy network block
        rx_bytes = 0
        tx_bytes = 0
        networks = stats.get('networks')
        if networks:
            for interface in networks.values():
                rx_bytes += int(interface.get('rx_bytes', 0))
                tx_bytes += int(interface.get('tx_bytes', 0))
        elif stats.get('network'):
            rx_bytes = int(stats['network'].get('rx_bytes', 0))
            tx_bytes = int(stats['network'].get('tx_bytes', 0))

        return cls(
            container_id=container_id,
            read=read,
            cpu_total=cpu_total,
            cpu_system=cpu_system,
            online_cpus=int(online_cpus),
            mem_usage=mem_usage,
            mem_limit=mem_limit,
            rx_bytes=rx_bytes,
            tx_bytes=tx_bytes,
        )

#!/usr/bin/env python3
"""
Dockmon - Stats Module
-----------
Streams container stats from the Docker daemon and pushes them into the
aggregation engine, one long-lived stream thread per running container.
"""
import logging
import threading

import docker

from dockmon.core.snapshot import RawSnapshot

logger = logging.getLogger(__name__)


class StatsCollector:
    def __init__(self, client, engine):
        self.client = client
        self.engine = engine

        # Stop flag per streamed container
        self.streams_lock = threading.Lock()
        self.streams = {}

    def sync(self, containers):
        """Start streams for new containers and stop streams for vanished ones"""
        live_ids = {c.id for c in containers}
        with self.streams_lock:
            for container_id in list(self.streams):
                if container_id not in live_ids:
                    self.streams.pop(container_id).set()
                    logger.info("Stopping stats stream for %s", container_id)

            for container in containers:
                if container.id in self.streams:
                    continue
                stop_event = threading.Event()
                self.streams[container.id] = stop_event
                logger.info("Starting stats stream for %s", container.id)
                self.start_stream(container.id, stop_event)

    def start_stream(self, container_id, stop_event):
        # Streams never end on their own while the container runs, so each gets its own thread
        thread = threading.Thread(
            target=self.stream_container_stats,
            args=(container_id, stop_event),
            name=f"stats-{container_id[:12]}",
            daemon=True,
        )
        thread.start()
        return thread

    def stream_container_stats(self, container_id, stop_event):
        """Push every stats event for one container into the engine"""
        try:
            for stats in self.client.api.stats(container_id, stream=True, decode=True):
                if stop_event.is_set() or self.engine.closed:
                    break
                snapshot = RawSnapshot.from_stats(container_id, stats)
                if snapshot is None:
                    continue
                self.engine.ingest(container_id, snapshot)
        except (docker.errors.DockerException, OSError, ValueError) as e:
            # Container went away or the daemon dropped the connection
            logger.warning("Stats stream for %s ended: %s", container_id, e)
        finally:
            # Let the next sync() restart the stream if the container is still listed
            with self.streams_lock:
                if self.streams.get(container_id) is stop_event:
                    del self.streams[container_id]

    def active_ids(self):
        with self.streams_lock:
            return set(self.streams)

    def stop_all(self):
        with self.streams_lock:
            for stop_event in self.streams.values():
                stop_event.set()
            self.streams.clear()

    def shutdown(self):
        """Stop all streams and discard in-flight snapshots"""
        self.stop_all()
        self.engine.close()

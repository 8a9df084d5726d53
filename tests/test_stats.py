import threading
import time
import types

import docker
import pytest

from dockmon.core.engine import AggregationEngine
from dockmon.core.stats import StatsCollector


def stats_event(read, total, system, rx=0):
    return {
        'read': read,
        'cpu_stats': {'cpu_usage': {'total_usage': total}, 'system_cpu_usage': system, 'online_cpus': 1},
        'memory_stats': {'usage': 10, 'limit': 100},
        'networks': {'eth0': {'rx_bytes': rx, 'tx_bytes': 0}},
    }


class DummyAPI:
    def __init__(self, events=None, error=None):
        self.events = events or {}
        self.error = error
        self.calls = []

    def stats(self, container_id, stream=True, decode=True):
        self.calls.append(container_id)
        if self.error:
            raise self.error
        return iter(self.events.get(container_id, []))


class DummyContainer:
    def __init__(self, id, name):
        self.id = id
        self.name = name


@pytest.fixture
def engine():
    return AggregationEngine()


def make_collector(engine, api):
    client = types.SimpleNamespace(api=api)
    return StatsCollector(client, engine)


def test_stream_pushes_snapshots(engine):
    api = DummyAPI({'a': [
        stats_event('t1', 100, 1000),
        stats_event('t1', 100, 1000),  # re-delivered
        {'read': 't2'},  # malformed
        stats_event('t3', 150, 1200, rx=50),
    ]})
    collector = make_collector(engine, api)
    collector.stream_container_stats('a', threading.Event())

    assert [s.read for s in engine.store.snapshots_for('a')] == ['t1', 't3']
    assert engine.derived_view('a').cpu_percent == 25
    assert engine.derived_view('a').network_rx_series == (50,)
    collector.shutdown()


def test_stream_stops_when_flagged(engine):
    api = DummyAPI({'a': [stats_event('t1', 1, 1), stats_event('t2', 2, 2)]})
    collector = make_collector(engine, api)
    stop = threading.Event()
    stop.set()
    collector.stream_container_stats('a', stop)
    assert engine.store.snapshots_for('a') == ()
    collector.shutdown()


def test_stream_errors_are_contained(engine):
    api = DummyAPI(error=docker.errors.NotFound("gone"))
    collector = make_collector(engine, api)
    stop = threading.Event()
    collector.streams['a'] = stop
    collector.stream_container_stats('a', stop)
    # Finished streams are forgotten so the next sync restarts them
    assert collector.active_ids() == set()
    collector.shutdown()


def test_sync_starts_and_stops_streams(engine, monkeypatch):
    collector = make_collector(engine, DummyAPI())
    submitted = []
    monkeypatch.setattr(collector, 'start_stream', lambda *args: submitted.append(args))

    collector.sync([DummyContainer('a', 'alpha'), DummyContainer('b', 'bravo')])
    assert [args[0] for args in submitted] == ['a', 'b']
    assert collector.active_ids() == {'a', 'b'}

    stop_a = collector.streams['a']
    collector.sync([DummyContainer('b', 'bravo')])
    assert stop_a.is_set()
    assert collector.active_ids() == {'b'}
    # Already streaming containers are not started twice
    assert len(submitted) == 2

    collector.stop_all()
    assert collector.active_ids() == set()


def test_shutdown_closes_engine(engine):
    collector = make_collector(engine, DummyAPI())
    collector.shutdown()
    assert engine.closed


def endless_events(container_id):
    i = 0
    while True:
        i += 1
        yield stats_event(f"t{i}", i * 10, i * 100)
        time.sleep(0.01)


def test_every_container_gets_its_own_stream(engine):
    api = DummyAPI()
    api.stats = lambda container_id, stream=True, decode=True: endless_events(container_id)
    collector = make_collector(engine, api)
    ids = [f"c{i}" for i in range(40)]

    collector.sync([DummyContainer(cid, cid) for cid in ids])

    deadline = time.time() + 5
    while time.time() < deadline:
        if all(engine.derived_view(cid).samples >= 2 for cid in ids):
            break
        time.sleep(0.05)
    collector.shutdown()

    assert [cid for cid in ids if engine.derived_view(cid).samples < 2] == []

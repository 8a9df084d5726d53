import pytest

from dockmon.core.snapshot import RawSnapshot


def build_snapshot(container_id='a', read='t0', cpu_total=0, cpu_system=0, online_cpus=1,
                   mem_usage=0, mem_limit=1024, rx_bytes=0, tx_bytes=0):
    return RawSnapshot(container_id, read, cpu_total, cpu_system, online_cpus,
                       mem_usage, mem_limit, rx_bytes, tx_bytes)


@pytest.fixture
def make_snapshot():
    return build_snapshot

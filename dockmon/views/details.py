#!/usr/bin/env python3
"""
Dockmon - Details Module
-----------
Container inspect summary shown on the details panel.
"""
import curses
import logging

import docker

from dockmon.utils.utils import draw_box, safe_addstr

logger = logging.getLogger(__name__)


def format_ports(attrs):
    """Sorted 'port -> bindings' pairs from the inspect network settings"""
    ports = (attrs.get('NetworkSettings') or {}).get('Ports') or {}
    res = []
    for key in sorted(ports):
        bindings = ports[key] or []
        targets = [f"{b.get('HostIp', '')}:{b.get('HostPort', '')}" for b in bindings]
        res.append(f"{key} -> {', '.join(targets) or '-'}")
    return ",".join(res)


def format_volumes(attrs):
    """One 'destination -> source' line per mount, sorted by destination"""
    mounts = attrs.get('Mounts') or []
    mounts = sorted(mounts, key=lambda m: m.get('Destination', ''))
    return [f"{m.get('Destination', '')} -> {m.get('Source', '')}" for m in mounts]


def details_lines(attrs):
    """Lines for the details panel from a container's inspect data"""
    config = attrs.get('Config') or {}
    host_config = attrs.get('HostConfig') or {}
    network = attrs.get('NetworkSettings') or {}

    lines = [
        f"Name: {attrs.get('Name', '')}",
        f"Image: {attrs.get('Image', '')}",
        f"Path: {attrs.get('Path', '')}",
        f"Args: {attrs.get('Args') or []}",
        f"IP: {network.get('IPAddress', '')}",
        f"Ports: {format_ports(attrs)}",
    ]
    for i, volume in enumerate(format_volumes(attrs)):
        prefix = "Volumes: " if i == 0 else "         "
        lines.append(prefix + volume)
    lines.extend([
        f"Hostname: {config.get('Hostname', '')}",
        f"Memory: {host_config.get('Memory', 0)}",
        f"Swap: {host_config.get('MemorySwap', 0)}",
        f"Cpu-Shares: {host_config.get('CpuShares', 0)}",
        f"Cpu-Set: {host_config.get('CpusetCpus', '')}",
        f"Env: {config.get('Env') or []}",
    ])
    return lines


def inspect_details(client, container_id):
    """Fetch inspect data and format it; an empty list if the daemon refuses"""
    try:
        attrs = client.api.inspect_container(container_id)
    except docker.errors.DockerException as e:
        logger.warning("Inspect failed for %s: %s", container_id, e)
        return []
    return details_lines(attrs)


def draw_details(win, frame):
    region = frame.layout.get('details')
    if region is None:
        return
    name = frame.details[0][len("Name: "):] if frame.details else ""
    inner = draw_box(win, region, f"Details: {name}" if name else "Details")
    for row, line in enumerate(frame.details[:inner.h]):
        safe_addstr(win, inner.y + row, inner.x, line[:inner.w], curses.color_pair(3))

#!/usr/bin/env python3
"""
Dockmon - Panels Module
-----------
Layouts and renderers for the main console panel. Renderers only read the
frame they are given; they never touch the engine directly.
"""
import curses

from dockmon import __version__
from dockmon.core.engine import derive
from dockmon.utils.utils import (Region, container_label, draw_box, format_bytes,
                                 hbar, safe_addstr, sparkline)

TITLE_HEIGHT = 3


def main_layout(h, w):
    """Title row, then list | memory % | memory values, then cpu | rx | tx"""
    body = max(0, h - TITLE_HEIGHT)
    top_h = body // 2
    bottom_h = body - top_h
    quarter = w * 3 // 12
    half = w * 6 // 12
    three_quarters = w * 9 // 12
    top = TITLE_HEIGHT
    bottom = TITLE_HEIGHT + top_h
    return {
        'title': Region(0, 0, TITLE_HEIGHT, w),
        'containers': Region(top, 0, top_h, quarter),
        'memory_percent': Region(top, quarter, top_h, three_quarters - quarter),
        'memory_value': Region(top, three_quarters, top_h, w - three_quarters),
        'cpu': Region(bottom, 0, bottom_h, half),
        'rx': Region(bottom, half, bottom_h, three_quarters - half),
        'tx': Region(bottom, three_quarters, bottom_h, w - three_quarters),
    }


def details_layout(h, w):
    return {
        'title': Region(0, 0, TITLE_HEIGHT, w),
        'details': Region(TITLE_HEIGHT, 0, max(0, h - TITLE_HEIGHT), w),
    }


def view_for(frame, container_id):
    view = frame.view.views.get(container_id)
    if view is None:
        return derive(container_id, ())
    return view


def draw_title(win, frame):
    region = frame.layout.get('title')
    if region is None:
        return
    inner = draw_box(win, region)
    safe_addstr(win, inner.y, inner.x, f"dockmon {__version__} ('q' to quit panel)", curses.A_BOLD)


def draw_container_list(win, frame):
    region = frame.layout.get('containers')
    if region is None:
        return
    inner = draw_box(win, region, "Containers (#num for details)")
    for idx, container in enumerate(frame.containers[:inner.h]):
        label = container_label(idx, container.name, container.id, inner.w)
        safe_addstr(win, inner.y + idx, inner.x, label, curses.color_pair(3))


def draw_cpu(win, frame):
    region = frame.layout.get('cpu')
    if region is None:
        return
    inner = draw_box(win, region, "CPU")
    row = 0
    for idx, container in enumerate(frame.containers):
        if row + 1 >= inner.h:
            break
        view = view_for(frame, container.id)
        title = f"[{view.cpu_percent} %] " + container_label(idx, container.name, container.id, inner.w)
        safe_addstr(win, inner.y + row, inner.x, title[:inner.w])
        safe_addstr(win, inner.y + row + 1, inner.x,
                    sparkline(view.cpu_percent_series, inner.w), curses.color_pair(3))
        row += 3


def _draw_network(win, frame, key, label, attr):
    region = frame.layout.get(key)
    if region is None:
        return
    inner = draw_box(win, region, label)
    row = 0
    for idx, container in enumerate(frame.containers):
        if row + 1 >= inner.h:
            break
        view = view_for(frame, container.id)
        # Nothing to show until there are two readings to diff
        if view.samples < 2:
            continue
        series = view.network_rx_series if key == 'rx' else view.network_tx_series
        latest = series[-1] if series else 0
        title = f"[{format_bytes(latest):>7}] " + container_label(idx, container.name, container.id, 20)
        safe_addstr(win, inner.y + row, inner.x, title[:inner.w])
        safe_addstr(win, inner.y + row + 1, inner.x, sparkline(series, inner.w), attr)
        row += 3


def draw_rx(win, frame):
    _draw_network(win, frame, 'rx', "Rx Bytes", curses.color_pair(2))


def draw_tx(win, frame):
    _draw_network(win, frame, 'tx', "Tx Bytes", curses.color_pair(5))


def draw_memory_percent(win, frame):
    region = frame.layout.get('memory_percent')
    if region is None:
        return
    inner = draw_box(win, region, "Memory % usage")
    bar_width = max(0, inner.w - 11)
    for idx, container in enumerate(frame.containers[:inner.h]):
        view = view_for(frame, container.id)
        if view.memory_percent is None:
            # No reading yet, or the container has no memory limit
            text = f"[{idx:2d}] " + ("n/a" if view.memory_limited else "no limit")
            safe_addstr(win, inner.y + idx, inner.x, text, curses.A_DIM)
            continue
        text = f"[{idx:2d}] {hbar(view.memory_percent, bar_width)} {view.memory_percent:3d}%"
        safe_addstr(win, inner.y + idx, inner.x, text, curses.color_pair(4))


def draw_memory_value(win, frame):
    region = frame.layout.get('memory_value')
    if region is None:
        return
    inner = draw_box(win, region, "Container Memory")
    for idx, container in enumerate(frame.containers[:inner.h]):
        view = view_for(frame, container.id)
        safe_addstr(win, inner.y + idx, inner.x,
                    f"[{idx:2d}]: {format_bytes(view.memory_usage)}", curses.color_pair(3))


# Draw order for every tick
RENDERERS = [
    draw_title,
    draw_container_list,
    draw_memory_percent,
    draw_memory_value,
    draw_cpu,
    draw_rx,
    draw_tx,
]

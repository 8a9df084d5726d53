#!/usr/bin/env python3
"""
Dockmon - Utilities Module
-----------
Drawing and formatting helpers shared by the panels.
"""
import curses
from collections import namedtuple

# Screen rectangle a panel draws into
Region = namedtuple('Region', ('y', 'x', 'h', 'w'))

SPARK_CHARS = " ▁▂▃▄▅▆▇█"


def safe_addstr(win, y, x, text, attr=0):
    """Add string only if within bounds; ignore errors"""
    h, w = win.getmaxyx()
    if 0 <= y < h and 0 <= x < w:
        try:
            # Convert to string and truncate
            text_str = str(text)[:max(0, w-x)]
            win.addstr(y, x, text_str, attr)
        except curses.error:
            pass


def format_bytes(num_bytes, suffix='B'):
    for unit in ['', 'K', 'M', 'G', 'T', 'P']:
        if abs(num_bytes) < 1024.0:
            return f"{num_bytes:.1f}{unit}{suffix}"
        num_bytes /= 1024.0
    return f"{num_bytes:.1f}Y{suffix}"


def truncate(text, maxlen):
    """Cut text to maxlen, marking the cut with ..."""
    if len(text) > maxlen:
        return text[:max(0, maxlen - 3)] + "..."
    return text


def container_label(idx, name, container_id, maxlen=30):
    """List entry for a container: [idx] name:id"""
    return truncate(f"[{idx}] {name}:{container_id}", maxlen)


def sparkline(values, width):
    """Render the most recent `width` values as block characters.

    Bars are scaled to the largest visible value; zero and negative values
    draw as blank cells.
    """
    if width <= 0:
        return ""
    visible = list(values)[-width:]
    top = max(visible, default=0)
    if top <= 0:
        return " " * len(visible)

    levels = len(SPARK_CHARS) - 1
    chars = []
    for value in visible:
        level = int(value * levels / top) if value > 0 else 0
        # Any positive value gets at least the lowest bar
        if value > 0 and level == 0:
            level = 1
        chars.append(SPARK_CHARS[min(level, levels)])
    return "".join(chars)


def hbar(percent, width):
    """Horizontal percentage bar, clamped to 0-100"""
    if width <= 0:
        return ""
    percent = max(0, min(100, percent))
    filled = percent * width // 100
    return "█" * filled + "░" * (width - filled)


def draw_box(win, region, title="", attr=0):
    """Draw a bordered box with a title and return the inner region"""
    y, x, h, w = region
    if h < 2 or w < 2:
        return Region(y, x, 0, 0)

    safe_addstr(win, y, x, "┌" + "─" * (w - 2) + "┐", attr)
    for row in range(y + 1, y + h - 1):
        safe_addstr(win, row, x, "│", attr)
        safe_addstr(win, row, x + w - 1, "│", attr)
    safe_addstr(win, y + h - 1, x, "└" + "─" * (w - 2) + "┘", attr)
    if title:
        safe_addstr(win, y, x + 1, truncate(title, w - 2), attr | curses.A_BOLD)

    return Region(y + 1, x + 1, h - 2, w - 2)

#!/usr/bin/env python3
"""
Dockmon - Core Module
-----------
Main DockMonTUI class: container polling, panel stack and the draw loop.
"""
import curses
import locale
import logging
import threading
import time
from collections import namedtuple

import docker

from dockmon.core.engine import AggregationEngine
from dockmon.core.errors import ContainerNotFound
from dockmon.core.history import MIN_CAPACITY
from dockmon.core.scheduler import TickScheduler
from dockmon.core.stats import StatsCollector
from dockmon.utils.config import DEFAULT_CONFIG
from dockmon.utils.utils import safe_addstr
from dockmon.views import panels
from dockmon.views.details import draw_details, inspect_details

logger = logging.getLogger(__name__)

MAIN = 'main'
DETAILS = 'details'

# One entry of the panel stack; index is only set for the details panel
PanelState = namedtuple('PanelState', ('kind', 'index'))


class PanelStack:
    def __init__(self, root):
        self._stack = [root]

    @property
    def current(self):
        return self._stack[-1]

    def push(self, state):
        self._stack.append(state)
        return state

    def pop(self):
        """Drop the top panel and return the one below it"""
        if len(self._stack) < 2:
            raise IndexError("no more panels in stack")
        self._stack.pop()
        return self._stack[-1]

    def __len__(self):
        return len(self._stack)


def connect(docker_url=None):
    """Docker client for the given socket URL, or from the environment"""
    if docker_url:
        return docker.DockerClient(base_url=docker_url)
    return docker.from_env()


def history_capacity(screen_width):
    return max(MIN_CAPACITY, screen_width - 2)


class DockMonTUI:
    def __init__(self, config=None):
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})

        self.client = connect(self.config['docker_url'])
        self.engine = AggregationEngine()
        self.collector = StatsCollector(self.client, self.engine)

        self.containers = []
        self.running = True
        self.fetch_lock = threading.Lock()
        self.last_container_fetch = 0
        self.container_fetch_interval = self.config['container_fetch_interval']

        self.panels = PanelStack(PanelState(MAIN, None))
        # Inspect lines for the details panel, refreshed with the container list
        self.details_cache = (None, [])

        # Fixed draw order; each renderer skips panels without its region
        self.scheduler = TickScheduler(self.engine, interval=self.config['refresh_interval'])
        for renderer in panels.RENDERERS + [draw_details]:
            self.scheduler.register(renderer)

    def fetch_containers(self):
        """Refresh the running container list and reconcile tracked stats (throttled)"""
        current_time = time.time()
        with self.fetch_lock:
            if current_time - self.last_container_fetch < self.container_fetch_interval:
                return self.containers
            self.last_container_fetch = current_time
            try:
                containers = self.client.containers.list()
            except docker.errors.DockerException as e:
                # Keep existing containers if fetch fails, but stop streaming
                logger.warning("Listing containers failed: %s", e)
                self.collector.stop_all()
                self.clear_details()
                return self.containers

            # Sort containers by name
            self.containers = sorted(containers, key=lambda c: c.name.lower())
            self.engine.reconcile([c.id for c in self.containers])
            if self.containers:
                self.collector.sync(self.containers)
            else:
                self.collector.stop_all()
                self.clear_details()
            if self.panels.current.kind == DETAILS:
                self.refresh_details()
        return self.containers

    def show_details(self, index):
        """Push the details panel for the container at index"""
        if self.panels.current.kind == DETAILS:
            self.panels.pop()
        self.panels.push(PanelState(DETAILS, index))
        # Fetch on the next loop pass so the inspect lines arrive promptly
        self.last_container_fetch = 0

    def clear_details(self):
        while self.panels.current.kind == DETAILS:
            self.panels.pop()
        self.details_cache = (None, [])

    def close_panel(self):
        """Pop the current panel; quit when only the main panel is left"""
        try:
            self.panels.pop()
        except IndexError:
            self.running = False

    def handle_key(self, key):
        if key in (ord('q'), ord('Q')):
            self.close_panel()
        elif ord('0') <= key <= ord('9'):
            self.show_details(key - ord('0'))

    def refresh_details(self):
        """Inspect the selected container; called from the container fetch, not from render"""
        try:
            container_id = self.engine.selected_for_details(self.panels.current.index)
        except ContainerNotFound:
            self.details_cache = (None, [])
            return
        self.details_cache = (container_id, inspect_details(self.client, container_id))

    def details_for(self, state):
        """Resolve the details panel's index to (container id, cached lines)"""
        try:
            container_id = self.engine.selected_for_details(state.index)
        except ContainerNotFound:
            return None, []
        cached_id, lines = self.details_cache
        return container_id, (lines if cached_id == container_id else [])

    def layout_for(self, state, h, w):
        if state.kind == DETAILS:
            return panels.details_layout(h, w)
        return panels.main_layout(h, w)

    def render(self, stdscr, now):
        h, w = stdscr.getmaxyx()
        self.engine.set_capacity(history_capacity(w))

        state = self.panels.current
        details_id, details = None, []
        if state.kind == DETAILS:
            details_id, details = self.details_for(state)

        frame = self.scheduler.build_frame(self.containers, self.layout_for(state, h, w),
                                           details_id=details_id, details=details)
        stdscr.erase()
        self.scheduler.tick(stdscr, frame, now)
        stdscr.refresh()

    def draw(self, stdscr):
        curses.curs_set(0)  # Hide cursor
        locale.setlocale(locale.LC_ALL, '')
        stdscr.nodelay(True)

        # Initialize colors
        curses.start_color()
        curses.init_pair(2, curses.COLOR_GREEN, curses.COLOR_BLACK)  # rx
        curses.init_pair(3, curses.COLOR_YELLOW, curses.COLOR_BLACK)  # lists, cpu
        curses.init_pair(4, curses.COLOR_RED, curses.COLOR_BLACK)  # memory bars
        curses.init_pair(5, curses.COLOR_BLUE, curses.COLOR_BLACK)  # tx

        try:
            stdscr.clear()
            safe_addstr(stdscr, 0, 0, "Loading containers...", curses.A_BOLD)
            stdscr.refresh()

            self.fetch_containers()

            while self.running:
                # Handle key presses immediately for responsiveness
                key = stdscr.getch()
                if key == curses.KEY_RESIZE:
                    self.scheduler.last_tick = 0  # Redraw immediately
                elif key != -1:
                    self.handle_key(key)
                    self.scheduler.last_tick = 0
                if not self.running:
                    break

                self.fetch_containers()

                current_time = time.time()
                if self.scheduler.due(current_time):
                    self.render(stdscr, current_time)

                # Sleep to reduce CPU usage, but keep it short for responsive UI
                time.sleep(0.01)
        finally:
            self.collector.shutdown()

#!/usr/bin/env python3
"""
Dockmon - Tick Scheduler
-----------
Runs a fixed, ordered list of renderers once per tick against one frame.
"""
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

# Everything a renderer may look at during a single tick
Frame = namedtuple('Frame', ('containers', 'view', 'layout', 'details_id', 'details'))


class TickScheduler:
    def __init__(self, engine, interval=0.5):
        self.engine = engine
        self.interval = interval
        self.renderers = []
        self.last_tick = 0

    def register(self, renderer):
        self.renderers.append(renderer)
        return renderer

    def due(self, now):
        return now - self.last_tick >= self.interval

    def build_frame(self, containers, layout, details_id=None, details=None):
        """Take one engine view so every renderer draws the same data"""
        return Frame(
            containers=tuple(containers),
            view=self.engine.view(),
            layout=layout,
            details_id=details_id,
            details=tuple(details or ()),
        )

    def tick(self, win, frame, now):
        for renderer in self.renderers:
            try:
                renderer(win, frame)
            except Exception:
                # One broken panel must not take down the render loop
                logger.exception("Renderer %s failed", getattr(renderer, '__name__', renderer))
        self.last_tick = now

"""
Dockmon
-----------
Live terminal console for per-container CPU, memory and network stats.
"""
import logging

__version__ = "0.1.0"

# Nothing may be printed over the curses screen unless main() configures a log file
logging.getLogger(__name__).addHandler(logging.NullHandler())

#!/usr/bin/env python3
"""
Dockmon - Main Entry Point
-----------
Launches the live container stats console.

Panels:
- Container list, memory % bars and memory usage
- CPU % sparklines per container
- Network Rx/Tx byte deltas per container
- Details panel with the container's inspect summary

Controls:
  - 0-9 : Show details for the numbered container
  - Q   : Close details panel / quit

Dependencies:
  pip install docker
"""
import argparse
import curses
import logging
import sys

import docker

from dockmon import __version__
from dockmon.utils.config import load_config, normalize_config, save_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="dockmon",
        description="Live terminal console for Docker container CPU, memory and network stats.",
    )
    parser.add_argument(
        "--docker",
        dest="docker_url",
        help="socket of the docker daemon, e.g. unix:///var/run/docker.sock "
             "(default: DOCKER_HOST or the local socket)",
    )
    parser.add_argument(
        "--interval",
        dest="refresh_interval",
        type=float,
        help="seconds between screen refreshes",
    )
    parser.add_argument("--log-file", dest="log_file", help="write logs to this file")
    parser.add_argument("--log-level", dest="log_level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="write the effective settings to ~/.dockmon.json",
    )
    parser.add_argument("--version", action="version", version=f"dockmon {__version__}")
    return parser.parse_args(argv)


def build_config(args, base=None):
    """Apply command line overrides on top of the loaded configuration"""
    config = dict(base if base is not None else load_config())
    for key in ("docker_url", "refresh_interval", "log_file", "log_level"):
        value = getattr(args, key)
        if value is not None:
            config[key] = value
    return normalize_config(config)


def configure_logging(config):
    # Only log to a file; stderr would draw over the curses screen
    if not config.get("log_file"):
        return
    logging.basicConfig(
        filename=config["log_file"],
        level=getattr(logging, str(config.get("log_level", "WARNING")).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv=None):
    args = parse_args(argv)
    config = build_config(args)
    configure_logging(config)

    if args.save_config:
        save_config(config)

    try:
        from dockmon.core.docker_tui import DockMonTUI
        curses.wrapper(DockMonTUI(config).draw)
    except docker.errors.DockerException as e:
        print("Error connecting to Docker daemon:", e)
        print("Make sure Docker is running and you have access to /var/run/docker.sock")
        return 1
    except KeyboardInterrupt:
        # Handle Ctrl+C gracefully
        pass
    return 0


if __name__ == '__main__':
    sys.exit(main())

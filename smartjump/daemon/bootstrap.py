"""Daemon bootstrap helpers for config, logging, and host wiring."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from smartjump.common.config import Config, ConfigLoader
from smartjump.common.settings import settings
from smartjump.x11.backend import X11Host
from smartjump.x11.display import DisplayManager

logger = logging.getLogger(__name__)


def configWithSettings_load(args: argparse.Namespace) -> Config:
    """
    Load configuration and initialize settings singleton.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded config.
    """
    config_path: Optional[Path] = Path(args.config) if args.config else None
    try:
        config: Config = ConfigLoader.configWithOverrides_load(
            file_path=config_path,
            display=args.display,
            edge_threshold=args.edge_threshold,
            jump_enabled=False if getattr(args, "no_jump", False) else None,
            fill_enabled=False if getattr(args, "no_fill", False) else None,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Create a config.yml file or specify path with --config", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    settings.initialize(config)
    return config


def loggingWithConfig_setup(
    args: argparse.Namespace,
    config: Config,
    logging_setup_func: Callable[[str, str, Optional[str]], None],
) -> None:
    """
    Setup logging from config and CLI override.

    Args:
        args: Parsed CLI args.
        config: Loaded config.
        logging_setup_func: Logging setup callback.
    """
    log_level: str = getattr(args, "log_level", None) or config.logging.level
    logging_setup_func(log_level, config.logging.format, config.logging.file)


def x11Host_create(config: Config) -> X11Host:
    """
    Create and connect the X11 host.

    Args:
        config: Loaded config.

    Returns:
        Connected host.
    """
    host = X11Host(DisplayManager(config.display))
    host.connection_establish()
    logger.info("Connected to X11 display %s", config.display or "(default)")
    return host

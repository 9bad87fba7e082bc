"""smartjump command-line interface"""

import argparse
import sys
from typing import NoReturn, Optional, Sequence

from smartjump import __version__


def arguments_parse(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list, sys.argv[1:] when None

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="smartjump",
        description="Jump the cursor across multi-monitor gaps and fill moved windows",
    )

    parser.add_argument("--version", action="version", version=f"smartjump {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--display", type=str, default=None, help="X11 display name (overrides config)"
    )

    parser.add_argument(
        "--edge-threshold",
        type=int,
        default=None,
        dest="edge_threshold",
        help="Pixels from a display edge that count as touching it (overrides config)",
    )

    parser.add_argument(
        "--no-jump",
        action="store_true",
        dest="no_jump",
        help="Disable cursor edge jumping",
    )

    parser.add_argument(
        "--no-fill",
        action="store_true",
        dest="no_fill",
        help="Disable filling windows moved to another display",
    )

    parser.add_argument(
        "--dump-zones",
        action="store_true",
        dest="dump_zones",
        help="Print displays and jump zones for the current layout and exit",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    return parser.parse_args(argv)


def main() -> NoReturn:
    """Main entry point for the smartjump command"""
    args = arguments_parse()

    log_level_override: Optional[str] = logLevelOverride_get(args)

    try:
        argsWithLogLevel_apply(args, log_level_override)
        daemonMode_run(args)
        sys.exit(0)

    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def logLevelOverride_get(args: argparse.Namespace) -> Optional[str]:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None.
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def argsWithLogLevel_apply(args: argparse.Namespace, log_level: Optional[str]) -> None:
    """
    Apply optional log level override to args.

    Args:
        args: Parsed CLI args.
        log_level: Optional log level string.
    """
    if log_level is not None:
        setattr(args, "log_level", log_level)


def daemonMode_run(args: argparse.Namespace) -> None:
    """
    Run daemon entrypoint.

    Args:
        args: Parsed CLI args.
    """
    from smartjump.daemon.main import daemon_run

    daemon_run(args)


if __name__ == "__main__":
    main()

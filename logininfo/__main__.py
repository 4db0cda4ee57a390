"""
Main CLI entry point for Login Info.

Provides a command-line interface for the record number settings and the TUI.
"""

import argparse
import sys
from pathlib import Path

from logininfo.logging import configure_logging_from_args, get_logger

DEFAULT_CONFIG_PATH = (Path(__file__).resolve().parent.parent / "config.yaml")


def build_parser() -> argparse.ArgumentParser:
    """
    Build the main argument parser with subcommands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="login-info",
        description="Login Info - record number shown on the login layout",
        epilog="Use 'login-info <command> --help' for more information on a specific command.",
    )

    # Global flags (available to all commands)
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (overrides --verbose)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands",
        required=False,  # Allow running without command for the TUI
    )

    subparsers.add_parser(
        "init",
        help="Create the settings table and store the default record number",
    )
    subparsers.add_parser(
        "show",
        help="Print the stored record number",
    )

    set_parser = subparsers.add_parser(
        "set",
        help="Set the record number (administrators only)",
    )
    set_parser.add_argument(
        "value",
        help="New record number (whole number)",
    )
    set_parser.add_argument(
        "--user",
        type=str,
        help="Configured user to act as (default: session_user)",
    )

    tui_parser = subparsers.add_parser(
        "tui",
        help="Start the terminal UI (default)",
    )
    tui_parser.add_argument(
        "--user",
        type=str,
        help="Configured user to sign in as (default: session_user)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Login Info CLI.

    Args:
        argv: Command-line arguments (for testing)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging based on arguments
    configure_logging_from_args(
        verbose=args.verbose,
        log_level=args.log_level,
        log_file=str(args.log_file) if args.log_file else None,
    )

    logger = get_logger(__name__)
    logger.debug(f"Parsed arguments: {args}")

    from logininfo.config import LoginInfoConfig, load_config_from_file

    # Load configuration
    cfg_path = Path(args.config).expanduser().resolve()
    if cfg_path.exists():
        logger.info(f"Loading configuration from: {cfg_path}")
        try:
            config = load_config_from_file(cfg_path)
        except ValueError as e:
            logger.error(f"Invalid configuration in {cfg_path}: {e}")
            print(f"Error: Invalid configuration: {e}", file=sys.stderr)
            return 1
    elif cfg_path == DEFAULT_CONFIG_PATH.resolve():
        logger.info("No configuration file found; using defaults")
        config = LoginInfoConfig()
    else:
        logger.error(f"Config file not found: {cfg_path}")
        print(f"Error: Configuration file not found: {cfg_path}", file=sys.stderr)
        return 1

    # TUI interface if no command specified
    if not args.command or args.command == "tui":
        logger.info("Starting TUI interface")
        from logininfo.ui.tui.app import run_tui
        return run_tui(config, user=getattr(args, "user", None))

    # Dispatch to appropriate command (single-shot mode)
    try:
        if args.command == "init":
            from logininfo.cli import run_init
            return run_init(config, args)
        if args.command == "show":
            from logininfo.cli import run_show
            return run_show(config, args)
        if args.command == "set":
            from logininfo.cli import run_set
            return run_set(config, args)

        parser.print_help()
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\nInterrupted by user.")
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        logger.exception("Unhandled exception in main")
        print(f"\nError: {e}", file=sys.stderr)
        if args.verbose:
            raise
        return 1


if __name__ == "__main__":
    sys.exit(main())

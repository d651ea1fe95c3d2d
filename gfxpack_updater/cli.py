"""
Command Line Interface for the graphic packs updater.

Prints a banner, runs one update and waits for the user to acknowledge the
outcome so a double-clicked run does not close before it can be read.
"""

import argparse
import sys
from typing import List, Optional

from .common.config import UpdaterSettings
from .common.constants import BANNER_RULE, BANNER_TITLE, PROMPT_MESSAGE
from .common.logging_config import configure_logging, get_logger
from .core.updater import GraphicPacksUpdater, UpdateResult


def print_banner() -> None:
    """Print the start-up banner."""
    print(BANNER_RULE)
    print(f"\t{BANNER_TITLE}")
    print(BANNER_RULE)


def acknowledge(settings: UpdaterSettings) -> None:
    """Block until the user presses Enter, when prompting applies."""
    if not settings.prompt_on_exit() or not sys.stdin or not sys.stdin.isatty():
        return
    try:
        input(PROMPT_MESSAGE)
    except EOFError:
        print()


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='gfxpack-updater',
        description='Download the newest Cemu graphic packs release and extract it'
    )
    parser.add_argument('--no-prompt', action='store_true',
                        help="Exit without waiting for 'Enter'")
    parser.add_argument('--dest', dest='extract_dir', metavar='DIR',
                        help='Directory to extract the graphic packs into')
    parser.add_argument('--download-dir', metavar='DIR',
                        help='Directory holding the downloaded archive')
    parser.add_argument('--log-level', metavar='LEVEL',
                        help='Logging level (default: GFXPACK_LOG_LEVEL or WARNING)')
    return parser


def settings_from_args(parsed_args: argparse.Namespace) -> UpdaterSettings:
    """Merge command line overrides into the environment settings."""
    return UpdaterSettings().with_overrides(
        extract_dir=parsed_args.extract_dir,
        download_dir=parsed_args.download_dir,
        prompt_on_exit=False if parsed_args.no_prompt else None,
    )


def run_update(settings: UpdaterSettings) -> UpdateResult:
    """Run the updater and print its outcome."""
    result = GraphicPacksUpdater(settings).run()
    print(result.message)
    return result


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Handled failures are reported the same way as success: a message, the
    acknowledgment prompt and exit status 0.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    parser = create_parser()
    if args is None:
        args = sys.argv[1:]
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level)
    logger = get_logger(__name__)
    settings = settings_from_args(parsed_args)

    print_banner()
    try:
        result = run_update(settings)
        logger.debug("Run finished in state %s", result.state.value)
    except KeyboardInterrupt:
        print("\nupdate cancelled")
    except Exception as exc:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"update failed: {exc}")
    acknowledge(settings)


if __name__ == '__main__':
    main()

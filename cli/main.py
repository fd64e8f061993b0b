"""CLI entry point."""

import argparse
import os
from typing import List, Optional

from common.logging_config import setup_logging
from cli.commands import create_client
from cli.config import DEFAULT_CONFIG_PATH
from cli.repl import repl_loop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='filereg', description="File descriptor registry shell")
    parser.add_argument('--debug', action='store_true', help="log at DEBUG level")
    parser.add_argument('--config', default=str(DEFAULT_CONFIG_PATH), help="settings file")
    parser.add_argument('--url', help="registry URL for this session")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    log_level = 'DEBUG' if args.debug else os.getenv('LOG_LEVEL', 'WARNING')
    logger = setup_logging('cli', log_level=log_level)

    client = create_client(args.config, base_url=args.url)
    try:
        repl_loop(client)
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()

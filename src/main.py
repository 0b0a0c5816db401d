"""
Main entry point for the Product Lifecycle Tracker application.

Resolves the configured environment and hands the command line to the
ledger CLI.
"""

import sys

from src.utils.config import get_config
from src.utils.ledger_cli import main as cli_main


def main(argv=None) -> int:
    """Application entry point."""
    config = get_config()
    if config.is_development:
        print(f"[{config.app_name} {config.app_version}] development database: {config.database_url}")
    return cli_main(argv)


if __name__ == "__main__":
    sys.exit(main())

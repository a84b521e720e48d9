"""Command line entry point for the reviewer assigner."""

import os
import sys
import logging
from dotenv import load_dotenv

from .assigner import ReviewerAssigner
from .config import Config, ConfigError


def configure_logging():
    """Configure logging (can be overridden by LOG_LEVEL environment variable)."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s %(levelname)s: %(message)s',
        datefmt='%m/%d/%Y %I:%M:%S %p'
    )


def main():
    """Main entry point for the script."""
    # Load environment variables from .env file if it exists
    load_dotenv()
    configure_logging()

    try:
        config = Config.from_env()
    except ConfigError as e:
        logging.error(str(e))
        sys.exit(1)

    logging.info(f"Assigning reviewers for {config.repository}#{config.pr_number}")
    if config.dry_run:
        logging.info("Dry run enabled, no reviewers will be requested and no notification sent")

    try:
        result = ReviewerAssigner(config).run()
    except Exception as e:
        logging.error(f"Reviewer assignment failed: {e}", exc_info=True)
        sys.exit(1)

    if result.to_add:
        logging.info(f"Requested review from: {', '.join(sorted(result.to_add))}")
    else:
        logging.info("No reviewers added")


if __name__ == "__main__":
    main()

# src/product_task_list/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, selects the product (from --product or
PTL_PRODUCT_ID) and runs the console panel in the main thread.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..cli.bootstrap import close_state, create_initial_state, friendly_error_message
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="product-task-list",
        description="Per-product to-do checklist with automatic suggestions.",
    )
    parser.add_argument(
        "--product",
        "-p",
        default=None,
        help="Product id (numeric or gid://shopify/Product/<n>). Defaults to PTL_PRODUCT_ID.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except RuntimeError as e:
        msg = friendly_error_message(e)
        logger.error("Startup failed: %s", msg)
        print(msg, file=sys.stderr)
        return 2

    try:
        product = args.product or settings.default_product_id
        if product:
            try:
                state.panel.select_product(product)
            except ValueError as e:
                print(f"Ignoring product id: {e}", file=sys.stderr)
        run_console_loop(state)
    finally:
        close_state(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

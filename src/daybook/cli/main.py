# src/daybook/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (store + validated snapshot + board), then
runs the console REPL.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort final flush (no exceptions should escape)."""
    try:
        with state.lock:
            state.board.save()
    except Exception:
        logger.exception("Failed to flush board on shutdown.")

    close = getattr(state.store, "close", None)
    if callable(close):
        try:
            close()
        except Exception:
            logger.debug("Store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, app_name=settings.app_name, console_level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()

# src/assignment_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the refresh loop in a background thread (optional),
- the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsolePresenter, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_scheduler import RefreshBackgroundRunner, start_refresh_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s...", settings.app_name)
    logger.debug("Logging to %s", log_file)

    state = create_initial_state(settings=settings)
    presenter = ConsolePresenter()

    refresh_runner: RefreshBackgroundRunner | None = None
    if settings.refresh_enabled:
        refresh_runner = start_refresh_in_background(
            state, presenter, interval_seconds=settings.refresh_interval_seconds
        )

    try:
        run_console_loop(state, presenter)
    finally:
        if refresh_runner is not None:
            refresh_runner.stop()
            refresh_runner.join(timeout=5.0)

        if not state.task_store.save(state.snapshot()):
            logger.warning("Final save failed.")
        logger.info("Bye.")


if __name__ == "__main__":
    main()

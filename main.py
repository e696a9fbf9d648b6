"""
Strategy Scorecard web service entry point.

Environment:
    SCORECARD_HOST / SCORECARD_PORT   bind address (default 0.0.0.0:8020)
    SCORECARD_RELOAD                  "1" to auto-reload on source changes
    SCORECARD_DATA_DIR                directory holding the snapshot
"""
import logging
import os
import sys

import uvicorn

from scorecard.exceptions import ScorecardError
from scorecard.logger import get_logger, setup_logging
from scorecard.registry import ScorecardRegistry


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").lower() in {"1", "true", "yes"}


def main():
    setup_logging(console_level=logging.INFO)
    logger = get_logger("main")

    # fail before binding the port if the snapshot cannot be read
    try:
        registry = ScorecardRegistry()
    except ScorecardError as e:
        logger.error(e.get_user_message())
        sys.exit(1)
    logger.info("Serving snapshot %s", registry.path)

    reload_enabled = _env_flag("SCORECARD_RELOAD")
    uvicorn.run(
        "web.backend.app:app",
        host=os.getenv("SCORECARD_HOST", "0.0.0.0"),
        port=int(os.getenv("SCORECARD_PORT", "8020")),
        reload=reload_enabled,
        reload_dirs=["web", "scorecard"] if reload_enabled else None,
    )


if __name__ == "__main__":
    main()

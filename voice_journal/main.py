"""Application bootstrap for Voice Journal.

This module starts the HTTP server via uvicorn when executed as a script.
Keeping the runtime bootstrap here (instead of in ``voice_journal/app.py``)
ensures the app module can be safely imported by unit tests and tooling
without side-effects.
"""
from __future__ import annotations

import uvicorn

from voice_journal import config
from voice_journal.app import logger


def main() -> None:  # pragma: no cover - manual run path
    """Serve the app until the process receives a termination signal."""

    logger.info("Launching uvicorn on %s:%d…", config.HOST, config.PORT)
    uvicorn.run(
        "voice_journal.app:create_app",
        factory=True,
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )
    logger.info("Goodbye.")


if __name__ == "__main__":  # pragma: no cover
    main()

#!/usr/bin/env python3
"""Launch the EmotiWise API server.

Usage:
    # From the backend/ directory with the venv activated:
    python scripts/run_server.py

    # Or from the repo root:
    python backend/scripts/run_server.py
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Ensure backend/ is on sys.path so `from emotiwise.…` imports work
_backend_dir = Path(__file__).resolve().parent.parent
if str(_backend_dir) not in sys.path:
    sys.path.insert(0, str(_backend_dir))

from emotiwise.config.settings import LOG_LEVEL, SERVER_HOST, SERVER_PORT  # noqa: E402

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s  %(levelname)-7s  %(name)-22s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("run_server")


def main() -> None:
    import uvicorn

    logger.info("Starting EmotiWise on %s:%s", SERVER_HOST, SERVER_PORT)
    uvicorn.run(
        "emotiwise.server:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        log_level=LOG_LEVEL.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()

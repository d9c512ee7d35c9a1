from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("BGPKIT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(host: str | None = None, port: int | None = None) -> None:
    root = Path(__file__).resolve().parent.parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    load_dotenv(root / ".env")
    configure_logging()
    host = host or os.getenv("BGPKIT_API_HOST", "0.0.0.0")
    port = port or int(os.getenv("BGPKIT_API_PORT", "3000"))
    logger.info("start listening to address http://%s:%s", host, port)
    logger.info("docs available at http://%s:%s/docs", host, port)
    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=False,
        log_config=None,
    )


if __name__ == "__main__":
    main()

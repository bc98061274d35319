"""Development server - Serve the sample application locally.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from hookrouter_core.app.routes import create_gateway
from hookrouter_core.middleware.logging import configure_logging
from hookrouter_core.utils.config import load_config

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the hookrouter development server")
    parser.add_argument("--config", help="JSON or YAML config file")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int, help="Bind port")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.log_level, "text")

    gateway = create_gateway(config)
    host = args.host or config.host
    port = args.port or config.port
    logger.info(f"Try: http://{host}:{port}/hello?name=Developer&lang=ja")

    try:
        gateway.run(host=host, port=port)
    except KeyboardInterrupt:
        logger.info("Development server stopped")


if __name__ == "__main__":
    main()

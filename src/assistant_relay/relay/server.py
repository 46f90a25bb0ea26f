"""Run the relay under uvicorn."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from assistant_relay.common.logging_setup import setup_logging
from assistant_relay.common.settings import DEFAULT_CFG_PATH, load_relay_settings
from assistant_relay.relay.app import create_app

LOGGER = logging.getLogger("assistant_relay.relay.server")

def main() -> None:
    ap = argparse.ArgumentParser(description="Serve the Gemini relay")
    ap.add_argument("--cfg", default=DEFAULT_CFG_PATH, help="Config path")
    args = ap.parse_args()

    settings = load_relay_settings(args.cfg)
    setup_logging(settings.log_level)
    if not settings.api_key:
        # Requests fail with 500 until a key is provided; the server still starts.
        LOGGER.error("GEMINI_API_KEY not configured")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)

if __name__ == "__main__":
    main()

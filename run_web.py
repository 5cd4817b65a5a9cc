#!/usr/bin/env python3
"""
Main entry point for the U14 Live web application.

This script launches the Flask-based API server. Settings can be overridden
with the U14LIVE_HOST, U14LIVE_PORT, U14LIVE_DATA_DIR and U14LIVE_ROSTER
environment variables.
"""
import logging
import os

from u14live.ui.web_app import run_web_app
from u14live.utils import DEFAULT_DATA_DIR, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_ROSTER_PATH

if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("U14LIVE_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_web_app(
        host=os.environ.get("U14LIVE_HOST", DEFAULT_HOST),
        port=int(os.environ.get("U14LIVE_PORT", DEFAULT_PORT)),
        data_dir=os.environ.get("U14LIVE_DATA_DIR", DEFAULT_DATA_DIR),
        roster_path=os.environ.get("U14LIVE_ROSTER", DEFAULT_ROSTER_PATH),
    )

"""
Runtime settings for the weekplanner service.
Values come from the environment (or a local .env file) with sane defaults.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# Conflict resolver day bounds ("HH:MM")
DAY_START = os.getenv("DAY_START", "06:00")
DAY_END = os.getenv("DAY_END", "22:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))


def configure_logging(level: str = None):
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

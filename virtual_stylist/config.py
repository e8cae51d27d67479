"""
Configuration module for the Virtual Stylist API
Contains logger setup and environment variables
"""

import os
import logging
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# -------------------------
# Logger Setup
# -------------------------
def setup_logger(
    name: str = __name__, log_file: Optional[str] = "virtual_stylist.log"
) -> logging.Logger:
    """
    Set up and return a logger with both file and console handlers

    Args:
        name: Logger name (usually __name__)
        log_file: Path to log file, or None to log to the console only

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    return float(raw)


def _parse_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# -------------------------
# Environment Variables
# -------------------------
LOG_FILE = os.getenv("LOG_FILE", "virtual_stylist.log") or None

# Create the main application logger
logger = setup_logger("virtual_stylist", LOG_FILE)

GEMINI_KEY = os.getenv("GEMINI_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-image")
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
# Unset means requests wait for the service indefinitely
GEMINI_TIMEOUT_SECONDS = _parse_timeout(os.getenv("GEMINI_TIMEOUT_SECONDS"))

CORS_ORIGINS = _parse_origins(os.getenv("CORS_ORIGINS"))


# Log configuration status
logger.info("Configuration loaded successfully")
logger.debug(f"GEMINI_KEY configured: {bool(GEMINI_KEY)}")
logger.debug(f"GEMINI_MODEL: {GEMINI_MODEL}")
logger.debug(f"GEMINI_TIMEOUT_SECONDS: {GEMINI_TIMEOUT_SECONDS}")
logger.debug(f"CORS_ORIGINS: {CORS_ORIGINS}")

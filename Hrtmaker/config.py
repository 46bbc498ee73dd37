#!/usr/bin/env python3

# =============================================================================
# == Configuration Module for HRT Schedule Maker ==
# =============================================================================
# This module defines paths, constants, and default settings for the schedule maker.

import os
import sys
import logging
from pathlib import Path

from dotenv import load_dotenv

# --- Define paths using Path for platform independence and security ---
HOME = Path.home()
CONFIG_DIR = HOME / ".hrt_schedule_config"
CREDENTIALS_FILE = CONFIG_DIR / "credentials.ini"
ENV_FILE = Path.cwd() / ".env"

# --- Output defaults (overridable from the command line) ---
DEFAULT_START_DAY = "2024-01-01"
DEFAULT_FILE_NAME = "hrtschedule"
DATE_FORMAT = "%Y-%m-%d"
SHEET_NAME = "Sheet1"
DOCUMENT_TITLE = "Hormone Tracking"
HEADERS = ["Day", "Date", "Hormones", "Amount", "Notes"]

# --- Cycle length ---
CYCLE_DAYS = 28

# --- Hormones in display order, with font colors (RGB hex) ---
HORMONE_COLORS = [
    ("Estrogen", "008000"),      # green
    ("Progesterone", "FFA500"),  # orange
    ("Testosterone", "A020F0"),  # purple
]

# --- Spreadsheet layout ---
HORMONES_COLUMN_WIDTH = 15  # "Testosterone" fits on one line
DATE_COLUMN_WIDTH = 40
DATA_ROW_HEIGHT = 50

# --- Default email settings - will be overridden by credentials.ini / .env / flags ---
DEFAULT_EMAIL = "your_default_recipient@example.com"
DEFAULT_SMTP_SERVER = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587
SMTP_TIMEOUT = 30  # seconds
EMAIL_SUBJECT = "Hormone Tracking Document"
EMAIL_BODY = "Attached is your hormone tracking document."

# --- Environment variable names (.env) ---
ENV_PASSWORD = "SENDER_PASSWORD"
ENV_OVERRIDES = {
    'email_to': "EMAIL_TO",
    'email_from': "EMAIL_FROM",
    'smtp_server': "SMTP_SERVER",
    'smtp_port': "SMTP_PORT",
    'smtp_user': "SMTP_USER",
}

# --- Keyring Service Name ---
KEYRING_SERVICE = "hrt_schedule_email"

# --- ANSI color codes for terminal output (CLI only) ---
class Color:
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[0;33m'
    BLUE = '\033[0;34m'
    PURPLE = '\033[0;35m'
    NC = '\033[0m'  # No Color

# --- Debug mode (True=on, False=off) ---
DEBUG = os.environ.get("HRT_SCHEDULE_DEBUG", "").lower() in ("1", "true", "yes")

def load_env_file(env_file=None):
    """Load the local .env file into os.environ. Returns True if a file was read."""
    path = Path(env_file) if env_file else ENV_FILE
    return load_dotenv(path)

def set_debug(enabled):
    """Toggle debug output at runtime (used by the --debug flag)."""
    global DEBUG
    DEBUG = bool(enabled)
    logging.getLogger("hrt_schedule").setLevel(logging.DEBUG if DEBUG else logging.INFO)

# --- Logging setup ---
logging.basicConfig(
    level=logging.INFO if not DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Create and export logger
logger = logging.getLogger("hrt_schedule")

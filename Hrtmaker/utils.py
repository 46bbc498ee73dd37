#!/usr/bin/env python3

import re
import logging
from datetime import datetime
from pathlib import Path

import config
from config import DATE_FORMAT
from errors import InputFormatError

# Setup logger reference
logger = logging.getLogger("hrt_schedule")

def is_valid_email(email):
    """Validate email format"""
    if not email:
        return False
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))

def debug(message):
    """Log debug messages if debug mode is on"""
    if config.DEBUG:
        logger.debug(f"{message}")

def parse_start_day(start_day):
    """Parse a YYYY-MM-DD string into a date, raising InputFormatError on bad input."""
    if not isinstance(start_day, str):
        raise InputFormatError(f"Invalid start day format: {start_day!r} (expected YYYY-MM-DD)")
    try:
        return datetime.strptime(start_day.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise InputFormatError(f"Invalid start day format: {start_day!r} ({e})") from e

def format_date(value):
    """Render a date the way it appears in the calendar cells."""
    return value.strftime(DATE_FORMAT)

def build_output_path(file_name, start_day, extension, output_dir=None):
    """Output file path: <file_name><start_day>.<extension> inside output_dir."""
    base = Path(output_dir) if output_dir else Path.cwd()
    # Tolerate a file name that already carries the extension (e.g. "hrtschedule.xlsx")
    stem = re.sub(rf'\.{re.escape(extension)}$', '', file_name, flags=re.IGNORECASE)
    return base / f"{stem}{start_day}.{extension}"

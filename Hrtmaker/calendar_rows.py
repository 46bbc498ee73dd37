#!/usr/bin/env python3

# =============================================================================
# == Calendar Row Generator ==
# =============================================================================

from collections import namedtuple
from datetime import datetime, timedelta

from config import CYCLE_DAYS, HORMONE_COLORS
from dosage_table import PLAIN, lookup

Hormone = namedtuple("Hormone", ["name", "color"])
CalendarRow = namedtuple("CalendarRow", ["day", "date", "hormones", "dosage_text", "notes"])

HORMONES = tuple(Hormone(name, color) for name, color in HORMONE_COLORS)


def generate(start_date, variant=PLAIN):
    """Build the CYCLE_DAYS rows for a cycle starting on start_date, day 1 first."""
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    rows = []
    for offset in range(CYCLE_DAYS):
        day = offset + 1
        rows.append(CalendarRow(
            day=day,
            date=start_date + timedelta(days=offset),
            hormones=HORMONES,
            dosage_text=lookup(day, variant),
            notes="",
        ))
    return rows

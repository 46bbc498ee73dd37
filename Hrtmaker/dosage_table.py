#!/usr/bin/env python3

# =============================================================================
# == Dosage Table ==
# =============================================================================
# One canonical day-range table. Spreadsheet and document cells get their text
# from two formatters over the same amounts, so both always agree per day.

from collections import namedtuple

# Inclusive day range [start_day, end_day] -> (estrogen, progesterone, testosterone).
# None means no dose of that hormone on those days.
DosageEntry = namedtuple("DosageEntry", ["start_day", "end_day", "amounts"])

PLAIN = "plain"
DOCUMENT = "document"
VARIANTS = (PLAIN, DOCUMENT)

# Document cells indent each line to sit under the indented hormone names
DOCUMENT_INDENT = "\x20\x20"

DOSAGE_TABLE = [
    DosageEntry(1, 5, (6, None, 1)),
    DosageEntry(6, 8, (8, None, 1)),
    DosageEntry(9, 11, (9, None, 1)),
    DosageEntry(12, 12, (10, None, 1)),
    DosageEntry(13, 13, (4, None, 2)),
    DosageEntry(14, 14, (4, 6, 3)),
    DosageEntry(15, 15, (5, 6, 4)),
    DosageEntry(16, 16, (5, 10, 3)),
    DosageEntry(17, 17, (5, 10, 2)),
    DosageEntry(18, 19, (6, 12, 1)),
    DosageEntry(20, 20, (6, 14, 1)),
    DosageEntry(21, 21, (6, 16, 1)),
    DosageEntry(22, 22, (6, 14, 1)),
    DosageEntry(23, 24, (6, 12, 1)),
    DosageEntry(25, 26, (6, 10, 1)),
    DosageEntry(27, 28, (6, 6, 1)),
]


def _amount_text(amount):
    return "" if amount is None else str(amount)


def format_for_sheet(amounts):
    """Newline-separated amounts; a missing dose leaves its line empty ("6\\n\\n1")."""
    return "\n".join(_amount_text(a) for a in amounts)


def format_for_document(amounts):
    """Same lines as format_for_sheet, each prefixed with DOCUMENT_INDENT."""
    return "\n".join(DOCUMENT_INDENT + _amount_text(a) for a in amounts)


FORMATTERS = {
    PLAIN: format_for_sheet,
    DOCUMENT: format_for_document,
}


def amounts_for_day(day, table=None):
    """Return the amounts triple for a day, or None when no range covers it."""
    for entry in table if table is not None else DOSAGE_TABLE:
        if entry.start_day <= day <= entry.end_day:
            return entry.amounts
    return None


def lookup(day, variant=PLAIN):
    """Dosage text for a cycle day.

    Returns an empty string when the day is outside every range (day <= 0 or
    day > 28). Callers treat the empty string as "nothing to style".
    """
    if variant not in FORMATTERS:
        raise ValueError(f"Unknown dosage text variant: {variant!r}")
    amounts = amounts_for_day(day)
    if amounts is None:
        return ""
    return FORMATTERS[variant](amounts)


def decode_amounts(text, variant=PLAIN):
    """Turn formatted dosage text back into an amounts tuple (None for blank lines)."""
    if variant not in FORMATTERS:
        raise ValueError(f"Unknown dosage text variant: {variant!r}")
    if not text:
        return ()
    amounts = []
    for line in text.split("\n"):
        if variant == DOCUMENT and line.startswith(DOCUMENT_INDENT):
            line = line[len(DOCUMENT_INDENT):]
        line = line.strip()
        amounts.append(int(line) if line else None)
    return tuple(amounts)


def covered_days(table=None):
    """Every day number covered by the table, in table order."""
    days = []
    for entry in table if table is not None else DOSAGE_TABLE:
        days.extend(range(entry.start_day, entry.end_day + 1))
    return days

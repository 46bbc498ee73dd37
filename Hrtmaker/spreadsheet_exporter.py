#!/usr/bin/env python3

# =============================================================================
# == Spreadsheet Exporter (openpyxl) ==
# =============================================================================

import logging
from pathlib import Path

from openpyxl import Workbook
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.cell.text import InlineFont
from openpyxl.styles import Alignment, Font

from config import (
    DATA_ROW_HEIGHT, DATE_COLUMN_WIDTH, HEADERS, HORMONES_COLUMN_WIDTH, SHEET_NAME,
)
from errors import ExportError
from utils import debug, format_date

logger = logging.getLogger("hrt_schedule")

# Column numbers (1-based) in header order
DAY_COL, DATE_COL, HORMONES_COL, AMOUNT_COL, NOTES_COL = range(1, len(HEADERS) + 1)

wrap_top = Alignment(wrap_text=True, vertical="top")
header_font = Font(bold=True)


def hormones_rich_text(hormones):
    """One colored run per hormone, each on its own line."""
    blocks = []
    for i, hormone in enumerate(hormones):
        text = hormone.name if i == len(hormones) - 1 else f"{hormone.name}\n"
        blocks.append(TextBlock(InlineFont(color=hormone.color), text))
    return CellRichText(*blocks)


def _write_row(ws, row):
    sheet_row = row.day + 1  # row 1 holds the headers
    ws.cell(row=sheet_row, column=DAY_COL, value=row.day)
    ws.cell(row=sheet_row, column=DATE_COL, value=format_date(row.date))

    hormone_cell = ws.cell(row=sheet_row, column=HORMONES_COL, value=hormones_rich_text(row.hormones))
    hormone_cell.alignment = wrap_top

    amount_cell = ws.cell(row=sheet_row, column=AMOUNT_COL, value=row.dosage_text)
    if row.dosage_text != "":
        amount_cell.alignment = wrap_top

    ws.cell(row=sheet_row, column=NOTES_COL, value=row.notes)
    ws.row_dimensions[sheet_row].height = DATA_ROW_HEIGHT


def build_workbook(rows):
    """Create the workbook in memory: headers in row 1, one calendar row per sheet row."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    for col, header in enumerate(HEADERS, start=1):
        ws.cell(row=1, column=col, value=header).font = header_font

    ws.column_dimensions["C"].width = HORMONES_COLUMN_WIDTH
    ws.column_dimensions["B"].width = DATE_COLUMN_WIDTH

    for row in rows:
        _write_row(ws, row)
    return wb


def export_spreadsheet(rows, path):
    """Render the rows into an .xlsx file at path. Raises ExportError on any failure."""
    path = Path(path)
    try:
        wb = build_workbook(rows)
    except Exception as e:
        raise ExportError(f"Failed to build spreadsheet: {e}") from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except Exception as e:
        # Don't leave a half-written file behind
        try: path.unlink()
        except FileNotFoundError: pass
        except OSError as cleanup_err: logger.warning(f"Could not remove partial file {path}: {cleanup_err}")
        raise ExportError(f"Failed to save spreadsheet {path}: {e}") from e

    debug(f"Wrote {len(rows)} rows to {path}")
    logger.info(f"Spreadsheet generated successfully: {path}")
    return path

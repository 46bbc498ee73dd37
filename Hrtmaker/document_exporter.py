#!/usr/bin/env python3

# =============================================================================
# == Document Exporter (python-docx) ==
# =============================================================================

import logging
from pathlib import Path

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import RGBColor

from config import DOCUMENT_TITLE, HEADERS
from dosage_table import DOCUMENT_INDENT
from errors import ExportError, IntegrityError
from utils import debug, format_date

logger = logging.getLogger("hrt_schedule")

# (edge, style, size in eighths of a point, color)
TABLE_BORDERS = [
    ("bottom", "single", 16, "000000"),
    ("insideH", "dotted", 8, "008000"),
    ("insideV", "single", 8, "000000"),
]


def set_table_borders(table, borders=TABLE_BORDERS):
    """Attach a w:tblBorders element to the table properties."""
    tbl_pr = table._tbl.tblPr
    tbl_borders = OxmlElement("w:tblBorders")
    for edge, style, size, color in borders:
        e = OxmlElement(f"w:{edge}")
        e.set(qn("w:val"), style)
        e.set(qn("w:sz"), str(size))
        e.set(qn("w:space"), "0")
        e.set(qn("w:color"), color)
        tbl_borders.append(e)
    # tblBorders must precede tblLook in the schema order
    look = tbl_pr.find(qn("w:tblLook"))
    if look is not None:
        look.addprevious(tbl_borders)
    else:
        tbl_pr.append(tbl_borders)
    return tbl_borders


def _fill_lines(cell, lines, colors=None):
    """Write one paragraph per line into a cell, reusing its initial empty paragraph."""
    for i, line in enumerate(lines):
        paragraph = cell.paragraphs[0] if i == 0 else cell.add_paragraph()
        run = paragraph.add_run(line)
        if colors and colors[i]:
            run.font.color.rgb = RGBColor.from_string(colors[i])


def build_document(rows):
    doc = Document()
    doc.add_heading(DOCUMENT_TITLE, level=0)  # level 0 uses the "Title" style

    table = doc.add_table(rows=1, cols=len(HEADERS))
    set_table_borders(table)

    for cell, header in zip(table.rows[0].cells, HEADERS):
        cell.paragraphs[0].add_run(header).bold = True

    for row in rows:
        day_cell, date_cell, hormone_cell, amount_cell, notes_cell = table.add_row().cells
        day_cell.text = str(row.day)
        date_cell.text = format_date(row.date)
        _fill_lines(
            hormone_cell,
            [DOCUMENT_INDENT + h.name for h in row.hormones],
            [h.color for h in row.hormones],
        )
        _fill_lines(amount_cell, row.dosage_text.split("\n") if row.dosage_text else [""])
        notes_cell.text = row.notes
    return doc


def verify_file_is_ready(path):
    """Check the saved document exists, is not empty and reopens. Raises IntegrityError."""
    path = Path(path)
    if not path.exists():
        raise IntegrityError(f"File {path} does not exist, document saving failed")
    if path.stat().st_size == 0:
        raise IntegrityError(f"File {path} is empty, document writing failed")
    try:
        Document(str(path))
    except Exception as e:
        raise IntegrityError(f"File {path} could not be reopened as a document: {e}") from e
    return path


def export_document(rows, path):
    """Render the rows into a .docx file and verify it. Returns the absolute path."""
    path = Path(path)
    if path.suffix.lower() == ".doc":
        path = path.with_suffix(".docx")
    elif path.suffix.lower() != ".docx":
        path = path.with_name(path.name + ".docx")
    try:
        doc = build_document(rows)
    except Exception as e:
        raise ExportError(f"Failed to build document: {e}") from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(path))
    except Exception as e:
        try: path.unlink()
        except FileNotFoundError: pass
        except OSError as cleanup_err: logger.warning(f"Could not remove partial file {path}: {cleanup_err}")
        raise ExportError(f"Failed to save Word document {path}: {e}") from e

    abs_path = path.resolve()
    verify_file_is_ready(abs_path)
    debug(f"Document {abs_path} passed integrity check")
    logger.info(f"Document generated successfully: {abs_path}")
    return abs_path

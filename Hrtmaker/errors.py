#!/usr/bin/env python3

# =============================================================================
# == Error types raised by the schedule maker ==
# =============================================================================
# Helpers raise; only main.py decides how the process exits.


class ScheduleError(Exception):
    """Base class for every failure that ends a run."""
    kind = "error"


class InputFormatError(ScheduleError):
    """The start day could not be parsed as a date."""
    kind = "input"


class ExportError(ScheduleError):
    """Writing or saving the spreadsheet or document failed."""
    kind = "export"


class IntegrityError(ScheduleError):
    """The saved document is missing, empty, or cannot be reopened."""
    kind = "integrity"


class MailError(ScheduleError):
    """Credentials could not be loaded or the SMTP send failed."""
    kind = "mail"

#!/usr/bin/env python3

import sys
import argparse
from config import (
    Color, DEFAULT_FILE_NAME, DEFAULT_START_DAY, logger, set_debug,
)
from errors import ScheduleError
from schedule_manager import FORMATS, ScheduleManager
from cli_interface import prompt_credentials_cli, run_cli

# =============================================================================
# == Argument parsing
# =============================================================================

def build_parser():
    parser = argparse.ArgumentParser(description="Generate a 28-day hormone schedule spreadsheet and document.")
    parser.add_argument("--start-day", default=DEFAULT_START_DAY, help="Specify the start day in YYYY-MM-DD format")
    parser.add_argument("--file-name", default=DEFAULT_FILE_NAME, help="Base name of the output files")
    parser.add_argument("--output-dir", default=None, help="Directory for the output files (default: current directory)")
    parser.add_argument("--format", dest="output_format", choices=FORMATS, default="both", help="Which files to generate")
    parser.add_argument("--recipient", default=None, help="Email recipient (overrides the configured address)")
    parser.add_argument("--no-email", action="store_true", help="Do not email the document")
    parser.add_argument("-auto", "--auto", dest="auto", action="store_true", help="Non-interactive: send without asking")
    parser.add_argument("--configure", action="store_true", help="Configure email settings and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser

# =============================================================================
# == Main Execution Block
# =============================================================================

def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.debug:
        set_debug(True)

    try:
        manager = ScheduleManager(start_day=args.start_day, file_name=args.file_name, output_dir=args.output_dir)
        if args.configure:
            prompt_credentials_cli(manager)
            return 0
        saved_files = run_cli(manager, output_format=args.output_format, send_email=not args.no_email,
                              recipient=args.recipient, auto_mode=args.auto)
    except ScheduleError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"{Color.RED}{e}{Color.NC}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(f"\n{Color.YELLOW}Operation interrupted. Exiting.{Color.NC}")
        return 0
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        print(f"{Color.RED}Unexpected error: {e}. Check log.{Color.NC}", file=sys.stderr)
        return 1

    for path in saved_files.values():
        logger.info(f"Output written: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

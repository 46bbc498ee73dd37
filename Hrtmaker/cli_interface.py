#!/usr/bin/env python3

import sys
import getpass
from config import Color, DEFAULT_SMTP_PORT, DEFAULT_SMTP_SERVER
from utils import is_valid_email, debug
from errors import MailError

def print_header(message):
    """Print a formatted header (CLI only)"""
    if sys.stdout.isatty():
        print(f"{Color.BLUE}{'=' * 55}{Color.NC}")
        print(f"{Color.BLUE}{message.center(55)}{Color.NC}")
        print(f"{Color.BLUE}{'=' * 55}{Color.NC}")
        print()
    else:
        print(f"\n=== {message} ===\n")


def ask_yes_no(question, default=None):
    """Ask a yes/no question and return True for yes, False for no (CLI only)"""
    if not sys.stdin.isatty():
        return default == "yes"  # Non-interactive, return default

    if default == "yes":
        prompt, default_answer = f"{question} [Yes] (y/n): ", "y"
    elif default == "no":
        prompt, default_answer = f"{question} [No] (y/n): ", "n"
    else:
        prompt, default_answer = f"{question} (y/n): ", None

    while True:
        try:
            answer = input(prompt).lower().strip()
            if not answer and default_answer:
                answer = default_answer
            if answer in ['y', 'yes']:
                return True
            elif answer in ['n', 'no']:
                return False
            else:
                print("Please answer yes (y) or no (n).")
        except EOFError:
            print("\nInput interrupted. Assuming 'no'.")
            return False


def _ask_email(label, current):
    value = input(f"{label} [{current}]: ").strip() or current
    while not is_valid_email(value):
        print(f"{Color.RED}Invalid email format. Please try again.{Color.NC}")
        value = input(f"{label} [{current}]: ").strip() or current
    return value


def prompt_credentials_cli(manager):
    """Prompt for email settings, save them to credentials.ini and the password to the keyring.

    Returns False when input is interrupted before the settings are saved.
    """
    print_header("EMAIL CONFIGURATION (CLI)")
    print("Enter/Update email settings. Password stored securely in system keyring.")

    # Edit a copy so an interrupted prompt leaves the loaded settings untouched
    creds = dict(manager.load_credentials())
    try:
        creds['email_to'] = _ask_email("Recipient email", creds.get('email_to', ''))
        creds['email_from'] = _ask_email("Sender email", creds.get('email_from', ''))
        creds['smtp_server'] = input(f"SMTP server [{creds.get('smtp_server') or DEFAULT_SMTP_SERVER}]: ").strip() or creds.get('smtp_server') or DEFAULT_SMTP_SERVER
        while True:
            port = input(f"SMTP port [{creds.get('smtp_port', DEFAULT_SMTP_PORT)}]: ").strip()
            if not port:
                break
            if port.isdigit():
                creds['smtp_port'] = int(port)
                break
            print(f"{Color.RED}Port must be a number.{Color.NC}")
        creds['smtp_user'] = input(f"SMTP username [{creds.get('smtp_user') or creds['email_from']}]: ").strip() or creds.get('smtp_user') or creds['email_from']
    except EOFError:
        print(f"\n{Color.YELLOW}Input interrupted. Settings not saved.{Color.NC}")
        return False

    manager.credentials.update(creds)
    if manager.save_credentials():
        print(f"{Color.GREEN}Settings saved.{Color.NC}")
    else:
        print(f"{Color.RED}Could not save settings. Check log.{Color.NC}")

    try:
        password = getpass.getpass(f"SMTP password for {creds['smtp_user']} (leave blank to keep current): ")
    except EOFError:
        print(f"\n{Color.YELLOW}Input interrupted. Password left unchanged.{Color.NC}")
        password = ""
    if password:
        try:
            manager.store_password(password)
            print(f"{Color.GREEN}Password securely stored/updated in keyring for user {creds['smtp_user']}.{Color.NC}")
        except MailError as e:
            print(f"{Color.RED}ERROR: {e}{Color.NC}")
    else:
        debug("Password left unchanged.")
    return True


def run_cli(manager, output_format="both", send_email=True, recipient=None, auto_mode=False):
    """Generate the calendar files and optionally mail the document.

    Errors from export or mail propagate to the caller. Returns the dict of
    written files.
    """
    print_header("HORMONE SCHEDULE GENERATOR (CLI)")

    saved_files = manager.save_generated_files(output_format)
    if saved_files.get('spreadsheet'):
        print(f"{Color.GREEN}Spreadsheet saved to {saved_files['spreadsheet']}{Color.NC}")
    if saved_files.get('document'):
        print(f"{Color.GREEN}Document saved to {saved_files['document']}{Color.NC}")

    document = saved_files.get('document')
    if send_email and document:
        target = recipient or manager.load_credentials().get('email_to')
        if auto_mode or ask_yes_no(f"Send the document to {target}?", "yes"):
            print(f"Attempting to send email to {target}...")
            message = manager.send_email_with_attachments(document, recipient)
            print(f"{Color.GREEN}{message}{Color.NC}")
        else:
            print(f"{Color.YELLOW}Email skipped.{Color.NC}")
    elif send_email:
        debug("No document generated; nothing to email.")

    print_header("SCHEDULE GENERATION COMPLETE")
    return saved_files

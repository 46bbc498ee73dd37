#!/usr/bin/env python3

import os
import configparser
from pathlib import Path
import logging

import keyring
import keyring.errors

# Import from our config and utils modules
from config import *
from utils import *
from calendar_rows import generate
from document_exporter import export_document
from dosage_table import DOCUMENT, PLAIN
from errors import MailError
from mailer import send_email_with_attachment
from spreadsheet_exporter import export_spreadsheet

# Get logger
logger = logging.getLogger("hrt_schedule")

FORMATS = ("xlsx", "docx", "both")


class ScheduleManager:
    """Builds the 28-day hormone calendar, writes its files and mails the document."""

    def __init__(self, start_day=DEFAULT_START_DAY, file_name=DEFAULT_FILE_NAME, output_dir=None,
                 credentials_file=None, env_file=None):
        # Parse first: a bad date must fail before anything touches the disk
        self.start_day = start_day
        self.start_date = parse_start_day(start_day)
        self.file_name = file_name
        self.output_dir = output_dir
        self.credentials_file = credentials_file or CREDENTIALS_FILE
        self.env_file = env_file
        self.credentials = {'email_to': DEFAULT_EMAIL, 'email_from': '', 'smtp_server': DEFAULT_SMTP_SERVER,
                            'smtp_port': DEFAULT_SMTP_PORT, 'smtp_user': ''}

    # --- Calendar rows ---

    def build_rows(self, variant=PLAIN):
        """Calendar rows for days 1..28 starting at the configured start date."""
        rows = generate(self.start_date, variant)
        debug(f"Generated {len(rows)} {variant} rows starting {self.start_day}")
        return rows

    def output_path(self, extension):
        return build_output_path(self.file_name, self.start_day, extension, self.output_dir)

    # --- Exports ---

    def export_spreadsheet(self):
        return export_spreadsheet(self.build_rows(PLAIN), self.output_path("xlsx"))

    def export_document(self):
        return export_document(self.build_rows(DOCUMENT), self.output_path("docx"))

    def save_generated_files(self, output_format="both"):
        """Write the requested files. Stops at the first failure (ExportError/IntegrityError)."""
        if output_format not in FORMATS:
            raise ValueError(f"Unknown output format: {output_format!r}")
        files_saved = {}
        if output_format in ("xlsx", "both"):
            files_saved['spreadsheet'] = str(self.export_spreadsheet())
        if output_format in ("docx", "both"):
            files_saved['document'] = str(self.export_document())
        return files_saved

    # --- Credentials ---

    def load_credentials(self):
        """Load email settings from credentials.ini, then let .env / environment override them."""
        config = configparser.ConfigParser()
        if self.credentials_file and Path(self.credentials_file).exists():
            try:
                config.read(self.credentials_file, encoding='utf-8')
                if 'Email' in config:
                    section = config['Email']
                    self.credentials['email_to'] = section.get('email_to', self.credentials['email_to'])
                    self.credentials['email_from'] = section.get('email_from', '')
                    self.credentials['smtp_server'] = section.get('smtp_server', DEFAULT_SMTP_SERVER)
                    self.credentials['smtp_port'] = section.getint('smtp_port', DEFAULT_SMTP_PORT)
                    self.credentials['smtp_user'] = section.get('smtp_user', self.credentials['email_from'])
                    debug("Non-sensitive credentials loaded from file.")
            except (configparser.Error, ValueError) as e:
                raise MailError(f"Error reading credentials file {self.credentials_file}: {e}") from e

        if load_env_file(self.env_file):
            debug("Loaded environment from .env file.")
        for key, env_name in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                self.credentials[key] = value
        try:
            self.credentials['smtp_port'] = int(self.credentials['smtp_port'])
        except (TypeError, ValueError) as e:
            raise MailError(f"Invalid SMTP port: {self.credentials['smtp_port']!r}") from e
        if not self.credentials.get('smtp_user'):
            self.credentials['smtp_user'] = self.credentials.get('email_from', '')

        return self.credentials

    def get_password(self):
        """SENDER_PASSWORD from the environment, else the system keyring. Raises MailError."""
        password = os.environ.get(ENV_PASSWORD)
        if password:
            debug(f"Password loaded from {ENV_PASSWORD}.")
            return password

        user = self.credentials.get('smtp_user')
        if not user:
            raise MailError(f"{ENV_PASSWORD} not set and no SMTP user configured for keyring lookup.")
        try:
            password = keyring.get_password(KEYRING_SERVICE, user)
        except keyring.errors.NoKeyringError as e:
            raise MailError(f"{ENV_PASSWORD} not set and no keyring backend found.") from e
        except keyring.errors.KeyringError as e:
            raise MailError(f"Error retrieving password from keyring: {e}") from e
        if not password:
            raise MailError(f"Password for {user} not found in {ENV_PASSWORD} or keyring.")
        debug(f"Password found in keyring for user {user}.")
        return password

    def store_password(self, password):
        """Save the SMTP password in the system keyring for the configured user."""
        user = self.credentials.get('smtp_user')
        if not user:
            raise MailError("No SMTP user configured; cannot store password.")
        try:
            keyring.set_password(KEYRING_SERVICE, user, password)
        except keyring.errors.KeyringError as e:
            raise MailError(f"Could not save password to keyring: {e}") from e
        logger.info(f"Password saved/updated in keyring for user {user}")

    def save_credentials(self):
        """Save non-sensitive email credentials to config file."""
        config = configparser.ConfigParser()
        config['Email'] = {
            'email_to': self.credentials.get('email_to', ''),
            'email_from': self.credentials.get('email_from', ''),
            'smtp_server': self.credentials.get('smtp_server', ''),
            'smtp_port': str(self.credentials.get('smtp_port', DEFAULT_SMTP_PORT)),
            'smtp_user': self.credentials.get('smtp_user', ''),
        }
        path = Path(self.credentials_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f: config.write(f)
        except OSError as e:
            logger.error(f"Error saving non-sensitive credentials to {path}: {e}")
            return False
        try: os.chmod(path, 0o600)
        except OSError: logger.warning(f"Could not set permissions on {path}.")
        debug("Non-sensitive credentials saved successfully.")
        return True

    # --- Email ---

    def send_email_with_attachments(self, file_path, recipient=None):
        """Mail the given file to recipient (or the configured email_to). Raises MailError."""
        self.load_credentials()
        recipient = recipient or self.credentials.get('email_to')
        password = self.get_password()
        return send_email_with_attachment(file_path, recipient, self.credentials, password)

#!/usr/bin/env python3

# =============================================================================
# == Mailer: send a generated file as an email attachment ==
# =============================================================================

import os
import smtplib
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.mime.application import MIMEApplication
from pathlib import Path

from config import EMAIL_BODY, EMAIL_SUBJECT, SMTP_TIMEOUT
from errors import MailError
from utils import debug, is_valid_email

logger = logging.getLogger("hrt_schedule")


def build_message(file_path, recipient, sender):
    """Plain-text message with the file attached under its basename."""
    msg = MIMEMultipart()
    msg['Subject'] = EMAIL_SUBJECT
    msg['From'] = sender
    msg['To'] = recipient
    msg.attach(MIMEText(EMAIL_BODY, 'plain', 'utf-8'))

    filename = os.path.basename(file_path)
    with open(file_path, 'rb') as f:
        attachment = MIMEApplication(f.read(), Name=filename)
    attachment.add_header('Content-Disposition', 'attachment', filename=filename)
    msg.attach(attachment)
    return msg


def send_email_with_attachment(file_path, recipient, creds, password):
    """Send file_path to recipient in a single attempt.

    creds holds email_from, smtp_server, smtp_port and smtp_user. Returns a
    status message on success, raises MailError otherwise.
    """
    if not is_valid_email(recipient):
        raise MailError(f"Invalid recipient email address: {recipient!r}")
    if not all(creds.get(k) for k in ['email_from', 'smtp_user', 'smtp_server']):
        raise MailError("Email sender/user/server not configured.")
    if not password:
        raise MailError(f"No password available for {creds['smtp_user']}.")
    if not Path(file_path).is_file():
        raise MailError(f"Attachment {file_path} not found.")

    try:
        msg = build_message(file_path, recipient, creds['email_from'])
    except OSError as e:
        raise MailError(f"Could not attach file {file_path}: {e}") from e
    debug(f"Attached {file_path}")

    server = None
    try:
        logger.info(f"Connecting to {creds['smtp_server']}:{creds['smtp_port']}")
        server = smtplib.SMTP(creds['smtp_server'], int(creds['smtp_port']), timeout=SMTP_TIMEOUT)
        server.ehlo()
        server.starttls()
        server.ehlo()
        logger.info(f"Logging in as {creds['smtp_user']}")
        server.login(creds['smtp_user'], password)
        logger.info(f"Sending email to: {recipient}")
        server.send_message(msg)
    except smtplib.SMTPAuthenticationError as e:
        logger.error("SMTP Authentication Error.")
        raise MailError("Email Authentication Failed: Check username/password.") from e
    except smtplib.SMTPConnectError as e:
        logger.error(f"SMTP Connection Error: {e}")
        raise MailError("Email Connection Failed: Could not connect to server.") from e
    except smtplib.SMTPServerDisconnected as e:
        logger.error("SMTP Server Disconnected unexpectedly.")
        raise MailError("Email Failed: Server disconnected unexpectedly.") from e
    except smtplib.SMTPException as e:
        logger.error(f"SMTP Error occurred: {e}")
        raise MailError(f"Email Failed: SMTP Error - {e}") from e
    except OSError as e:
        logger.error(f"Error sending email: {e}")
        raise MailError(f"Email Failed: {e}") from e
    finally:
        if server is not None:
            try: server.quit()
            except (smtplib.SMTPException, OSError): debug("SMTP quit failed; connection already closed.")
            else: logger.info("SMTP connection closed.")

    return f"Email sent successfully to {recipient}."

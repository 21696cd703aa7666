"""Outbound email delivery over SMTP."""

from __future__ import annotations

import logging
import smtplib
import time
from email.message import EmailMessage

from flask import current_app

from marketplace.errors import EmailDeliveryError

logger = logging.getLogger(__name__)


def send_message(to_email: str, subject: str, body: str) -> None:
    """
    Send a plain-text email using the configured SMTP server.

    With ``MAIL_SUPPRESS_SEND`` enabled the message is logged instead.
    Raises ``smtplib.SMTPException`` or ``OSError`` when delivery fails.
    """
    config = current_app.config

    if config.get("MAIL_SUPPRESS_SEND"):
        logger.info("[Email not sent] To %s: %s\n%s", to_email, subject, body)
        return

    sender = config.get("EMAIL_FROM") or config.get("EMAIL_USER")
    if not sender:
        raise EmailDeliveryError("Email sender is not configured.")

    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = sender
    message["To"] = to_email
    message.set_content(body)

    with smtplib.SMTP(config["SMTP_HOST"], int(config["SMTP_PORT"]), timeout=30) as smtp:
        smtp.starttls()
        user = config.get("EMAIL_USER")
        password = config.get("EMAIL_PASS")
        if user and password:
            smtp.login(user, password)
        smtp.send_message(message)


def build_verification_email(otp: str, verify_url: str, flow_type: str) -> str:
    return (
        f"Your OTP is {otp}\n\n"
        f"Enter it to publish your {flow_type} listing:\n"
        f"{verify_url}\n\n"
        "If you did not submit a listing, you can ignore this email."
    )


def send_verification_email(to_email: str, otp: str, verify_url: str, flow_type: str) -> None:
    """Send the passcode email, retrying before giving up with ``EmailDeliveryError``."""
    config = current_app.config
    attempts = max(1, int(config.get("EMAIL_SEND_ATTEMPTS", 1)))
    delay = float(config.get("EMAIL_RETRY_DELAY_SECONDS", 0))
    body = build_verification_email(otp, verify_url, flow_type)

    for attempt in range(1, attempts + 1):
        try:
            send_message(to_email, "OTP Verification", body)
            logger.info("Verification email sent to %s (attempt %d)", to_email, attempt)
            return
        except EmailDeliveryError:
            raise
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Email to %s failed on attempt %d/%d: %s", to_email, attempt, attempts, exc)
            if attempt < attempts and delay > 0:
                time.sleep(delay * attempt)

    raise EmailDeliveryError("Could not send the verification email. Please try again later.")

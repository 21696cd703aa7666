"""Environment-driven settings merged into ``app.config``."""

from __future__ import annotations

import os
from typing import Any, Dict


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> Dict[str, Any]:
    """Read marketplace settings from the environment."""
    email_user = os.getenv("EMAIL_USER")
    return {
        "ALLOWED_EMAIL_DOMAIN": os.getenv("ALLOWED_EMAIL_DOMAIN", "@bue.edu.eg"),
        "MAX_UPLOAD_BYTES": _env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
        "MAX_IMAGES": _env_int("MAX_IMAGES", 10),
        "OTP_TTL_SECONDS": _env_int("OTP_TTL_SECONDS", 15 * 60),
        "OTP_MAX_ATTEMPTS": _env_int("OTP_MAX_ATTEMPTS", 5),
        "PUBLIC_BASE_URL": os.getenv("PUBLIC_BASE_URL", "http://localhost:10000").rstrip("/"),
        "DEFAULT_PAGE_SIZE": _env_int("DEFAULT_PAGE_SIZE", 10),
        "MAX_PAGE_SIZE": _env_int("MAX_PAGE_SIZE", 50),
        "EMAIL_USER": email_user,
        "EMAIL_PASS": os.getenv("EMAIL_PASS"),
        "EMAIL_FROM": os.getenv("EMAIL_FROM", email_user),
        "SMTP_HOST": os.getenv("SMTP_HOST", "smtp.gmail.com"),
        "SMTP_PORT": _env_int("SMTP_PORT", 587),
        "EMAIL_SEND_ATTEMPTS": _env_int("EMAIL_SEND_ATTEMPTS", 3),
        "EMAIL_RETRY_DELAY_SECONDS": _env_float("EMAIL_RETRY_DELAY_SECONDS", 1.0),
        "MAIL_SUPPRESS_SEND": _env_bool("MAIL_SUPPRESS_SEND"),
    }

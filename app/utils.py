"""
Small utilities:
- Email shape check used by both forms
- PII redaction (basic regex masking) for log output
"""

import re
from typing import Any

from app.config import settings

# Same loose check the landing page uses client-side: x@y.z, no whitespace.
EMAIL_FORMAT_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_FORMAT_RE.match(value))


def clean(value: Any) -> str:
    """Trimmed string, or "" for anything that is not a string."""
    if not isinstance(value, str):
        return ""
    return value.strip()


# Very simple PII masking (emails, phones).
EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"\b\+?\d[\d\-\s]{7,}\d\b")


def maybe_redact_pii(text: str) -> str:
    if not text or not settings.PII_REDACTION_ENABLED:
        return text
    text = EMAIL_RE.sub("[REDACTED_EMAIL]", text)
    text = PHONE_RE.sub("[REDACTED_PHONE]", text)
    return text

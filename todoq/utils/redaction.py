"""
Redaction helpers for logging user-supplied text and addresses.

Provides:
- redact(): Hash sensitive strings for correlation without exposure
- redact_text(): Partially redact free text (task input, model replies)
- redact_email(): Mask the local part of an email address
"""

from __future__ import annotations

from hashlib import sha256


def redact(value: str | None) -> str:
    """
    Return a stable hash representation of a sensitive string.
    """
    if not value:
        return "hash:missing"
    digest = sha256(value.encode("utf-8")).hexdigest()[:12]
    return f"hash:{digest}"


def redact_text(text: str | None, max_length: int = 30) -> str:
    """
    Partially redact free text for logging while preserving debuggability.

    Shows the first N characters plus a hash suffix for correlation.

    Example:
        "Please send the Q3 report to finance by Friday" ->
        "Please send the Q3 report to f..." (h:7a8b9c)
    """
    if not text:
        return "(empty)"

    visible = text[:max_length] + "..." if len(text) > max_length else text
    digest = sha256(text.encode("utf-8")).hexdigest()[:6]
    return f"{visible!r} (h:{digest})"


def redact_email(address: str | None) -> str:
    """
    Mask an email address, keeping the first character and the domain.
    Values without an @ fall back to redact().

    Example:
        >>> redact_email("jane.doe@example.com")
        'j***@example.com'
    """
    if not address or "@" not in address:
        return redact(address)
    local, _, domain = address.partition("@")
    return f"{local[:1]}***@{domain}"

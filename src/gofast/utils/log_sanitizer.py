"""Log sanitization filter to keep tokens and contact details out of logs.

Run drafts are built from text organisers paste in, which regularly
contains email addresses, and every request carries an ID token. This
filter redacts before records are emitted:
- Bearer tokens and authorization headers
- JWTs (Firebase ID tokens and locally issued ones)
- Google/Firebase API keys
- Secret, password and token fields
- Email addresses
- Long hex strings that look like tokens

Usage:
    from gofast.utils.log_sanitizer import install_log_sanitizer

    # Apply to all loggers at application startup
    install_log_sanitizer()
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts sensitive information from log messages."""

    # Order matters - more specific patterns should come before general ones
    PATTERNS: list[tuple[re.Pattern, str]] = [
        # JWTs (three base64url segments) - before Bearer
        (re.compile(r'\beyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]*'), '[REDACTED_JWT]'),

        # Bearer tokens in Authorization headers
        (re.compile(r'Bearer\s+(?!\[REDACTED)[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),

        # Authorization header values (generic)
        (re.compile(r'(Authorization["\']?\s*[:=]\s*["\']?)(?!Bearer \[REDACTED)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Google / Firebase web API keys
        (re.compile(r'\bAIza[0-9A-Za-z_-]{35}\b'), '[REDACTED_GOOGLE_KEY]'),

        # Password and secret fields
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(secret(?:_key)?["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'(api_key["\']?\s*[:=]\s*["\']?)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Token fields
        (re.compile(r'((?:id_|access_|refresh_)?token["\']?\s*[:=]\s*["\']?)(?!\[REDACTED)[^"\'&\s]+', re.IGNORECASE), r'\1[REDACTED]'),

        # Email addresses
        (re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[REDACTED_EMAIL]'),

        # Generic long hex strings that might be tokens (32+ chars)
        (re.compile(r'\b[a-fA-F0-9]{32,}\b'), '[REDACTED_HEX_TOKEN]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the log record; never drops it."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))

        if record.args:
            record.args = self._sanitize_args(record.args)

        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        """Recursively sanitize log arguments."""
        if isinstance(args, str):
            return self._sanitize(args)
        elif isinstance(args, tuple):
            return tuple(self._sanitize_args(arg) for arg in args)
        elif isinstance(args, list):
            return [self._sanitize_args(arg) for arg in args]
        elif isinstance(args, dict):
            return {k: self._sanitize_args(v) for k, v in args.items()}
        else:
            str_val = str(args)
            sanitized = self._sanitize(str_val)
            # Keep non-string args untouched unless they actually leaked something
            return sanitized if sanitized != str_val else args


def install_log_sanitizer(logger_name: str | None = None) -> None:
    """Install the log sanitization filter on loggers.

    Args:
        logger_name: If provided, install only on the named logger.
                    If None, install on the root logger and its handlers.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
        return

    root_logger = logging.getLogger()
    root_logger.addFilter(sanitizer)
    for handler in root_logger.handlers:
        handler.addFilter(sanitizer)


def sanitize_string(text: str) -> str:
    """Sanitize a string without going through the logging system."""
    return LogSanitizationFilter()._sanitize(text)

"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

# Reservation codes let a guest look up a booking; keep only the tail.
_RESERVATION_CODE_PATTERN = re.compile(r"\bRSV[0-9A-F]{4}([0-9A-F]{4})\b")
_URL_PASSWORD_PATTERN = re.compile(r"(://[^:/@\s]+:)[^@\s]+@")


class SensitiveFilter(logging.Filter):
    """Mask reservation codes and database passwords in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        scrubbed = _RESERVATION_CODE_PATTERN.sub(r"RSV****\1", message)
        scrubbed = _URL_PASSWORD_PATTERN.sub(r"\1***@", scrubbed)
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


__all__ = ["SensitiveFilter"]

"""Logging helpers."""

from __future__ import annotations

import logging

from asgi_correlation_id import CorrelationIdFilter

from app.security.logging_filters import SensitiveFilter

_HANDLER_NAME = "hotel-api"


def configure_logging(level: str) -> None:
    """Attach a request-aware stream handler to the root logger once."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))
    handler.addFilter(SensitiveFilter())
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | [%(correlation_id)s] %(message)s"
        )
    )
    root.addHandler(handler)

"""
Logging utilities for the invoice dashboard backend.

Handlers, format and level are configured once by `logging.basicConfig` in
`invoicing.main` from `settings.LOG_LEVEL`. Module loggers only propagate
to the root logger.

CRITICAL SECURITY RULES:
- NEVER log raw passwords or password hashes
- NEVER log session tokens or the AUTH_SECRET
- NEVER log full form payloads from the sign-up or login forms

Acceptable logging:
- High-level events (e.g., "Invoice created", "Session issued")
- Identifiers (invoice_id, user_id, customer_id)
- Error codes and sanitized error messages
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get the logger for a module.

    Args:
        name: Module name (typically __name__)
        level: Optional per-module override; by default the logger inherits
            the root level set from LOG_LEVEL

    Usage:
        >>> from invoicing.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Invoice created")
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger

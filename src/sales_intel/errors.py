"""Error types and the shared error-reporting helper for CLI commands."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SalesIntelError(Exception):
    """Base class for errors raised by this package."""


class RuleLoadError(SalesIntelError):
    """A rule, config, or dataset file has invalid content."""


class NotFoundError(SalesIntelError, LookupError):
    """A record requested by id does not exist for the tenant."""


def log_and_return_error(*, operation: str, exc: Exception, user_message: str) -> str:
    """Log full exception details while returning a safe user-facing error."""
    logger.exception("Operation '%s' failed", operation, exc_info=exc)
    return user_message

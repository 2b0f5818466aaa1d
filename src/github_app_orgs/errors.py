"""Error taxonomy and failure classification.

Components below the orchestrator raise these (or let third-party errors
propagate untouched); only :func:`classify_failure` turns a failure into the
single message reported to the runner.
"""

from __future__ import annotations


class ActionError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(ActionError):
    """A required input was not supplied."""


class AuthenticationError(ActionError):
    """GitHub rejected the App credentials."""


class RateLimitError(ActionError):
    """GitHub refused the request because a rate limit was hit."""


class ApiError(ActionError):
    """Any other failed GitHub API request."""


AUTHENTICATION_PREFIX = "Authentication failed"
RATE_LIMIT_PREFIX = "GitHub API rate limit exceeded"
API_ERROR_PREFIX = "GitHub API error"


def _message_of(error: BaseException) -> str:
    message = str(error)
    if not message:
        return type(error).__name__
    return message


def classify_failure(failure: object) -> str:
    """Return the user-facing failure message for anything caught by ``run``.

    Exceptions are classified by substring on the lower-cased message, first
    match wins: authentication/credentials, then rate limit, then
    api/request failed. When no substring matches, a typed error still maps
    onto its category. Missing inputs and non-exception values (via
    ``str()``) are reported verbatim.
    """

    if not isinstance(failure, BaseException):
        return str(failure)

    message = _message_of(failure)

    if isinstance(failure, ConfigurationError):
        return message

    lowered = message.lower()
    if "authentication" in lowered or "credentials" in lowered:
        return f"{AUTHENTICATION_PREFIX}: {message}"
    if "rate limit" in lowered:
        return f"{RATE_LIMIT_PREFIX}: {message}"
    if "api" in lowered or "request failed" in lowered:
        return f"{API_ERROR_PREFIX}: {message}"

    if isinstance(failure, AuthenticationError):
        return f"{AUTHENTICATION_PREFIX}: {message}"
    if isinstance(failure, RateLimitError):
        return f"{RATE_LIMIT_PREFIX}: {message}"
    if isinstance(failure, ApiError):
        return f"{API_ERROR_PREFIX}: {message}"
    return message

"""
Application service: turn a failed question into the sentence shown to the user.

Classification is by substring of the lower-cased error text, checked in the
order of _MARKERS; anything unrecognised is echoed back verbatim.
"""

from enum import Enum


class FailureKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    NETWORK = "network"
    RATE_LIMIT = "rate_limit"
    GENERIC = "generic"


_MARKERS: tuple[tuple[FailureKind, tuple[str, ...]], ...] = (
    (
        FailureKind.MISSING_CREDENTIAL,
        ("api key", "api_key", "credentials", "security token", "unrecognizedclient"),
    ),
    (
        FailureKind.NETWORK,
        ("network", "could not connect", "connection", "timed out"),
    ),
    (
        FailureKind.RATE_LIMIT,
        ("rate limit", "throttl", "too many requests"),
    ),
)

GENERIC_APOLOGY = (
    "I apologize, but I encountered an error processing your request. Please try again."
)

_MESSAGES = {
    FailureKind.MISSING_CREDENTIAL: (
        "The language model API credentials are not configured. "
        "Please set up your credentials in the .env file."
    ),
    FailureKind.NETWORK: "Network error. Please check your internet connection and try again.",
    FailureKind.RATE_LIMIT: "Rate limit exceeded. Please wait a moment and try again.",
}


def classify_failure(exc: BaseException) -> FailureKind:
    text = str(exc).lower()
    for kind, markers in _MARKERS:
        if any(marker in text for marker in markers):
            return kind
    return FailureKind.GENERIC


def describe_failure(exc: BaseException) -> str:
    kind = classify_failure(exc)
    if kind is FailureKind.GENERIC:
        return f"Error: {exc}" if str(exc) else GENERIC_APOLOGY
    return _MESSAGES[kind]

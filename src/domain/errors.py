"""
Error taxonomy shared by every layer.

ParseError and BackendWriteError abort the operation that raised them.
Backend read failures are not raised at all: they travel as
StockQueryResult.error so a question can still be answered.
"""


class StockChatError(Exception):
    """Base class for all application errors."""


class ParseError(StockChatError, ValueError):
    """The uploaded CSV produced no usable rows."""


class BackendWriteError(StockChatError):
    """The persistence backend rejected a write."""


class BackendReadError(StockChatError):
    """The persistence backend failed a read."""


class ModelError(StockChatError):
    """The language model call failed."""

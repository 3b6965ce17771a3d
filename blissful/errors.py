"""Exception types raised by the order book."""


class BlissfulError(Exception):
    """Base class for all application errors."""


class ConfigError(BlissfulError):
    """Database configuration is missing, incomplete or unreadable."""


class DatabaseConnectionError(BlissfulError):
    """The database could not be opened or did not answer the ping."""


class QueryError(BlissfulError):
    """A read query failed."""


class ValidationError(BlissfulError):
    """User supplied a value that cannot be used (price, quantity, date...)."""


class TransactionError(BlissfulError):
    """A write failed and its transaction was rolled back."""


class NotFoundError(BlissfulError):
    """The referenced row does not exist."""


class ExportError(BlissfulError):
    """The spreadsheet could not be written."""


__all__ = [
    'BlissfulError',
    'ConfigError',
    'DatabaseConnectionError',
    'QueryError',
    'ValidationError',
    'TransactionError',
    'NotFoundError',
    'ExportError',
]

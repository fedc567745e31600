"""
Error types

Two tiers: anything raised as a BookstoreError aborts the run, while
failures inside a single catalog step are caught and reported by the runner.
"""


class BookstoreError(Exception):
    """Base class for fatal errors"""


class ConfigError(BookstoreError, ValueError):
    """Missing or malformed configuration"""


class DatabaseConnectionError(BookstoreError):
    """The initial connection to MongoDB could not be established"""

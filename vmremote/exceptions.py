"""Custom exceptions for the VM remote keyword server."""


class RemoteServerError(RuntimeError):
    """Raised on unrecoverable configuration or runtime errors."""


class ConfigError(RemoteServerError):
    """Raised when command-line or environment configuration is invalid."""


class LibraryLoadError(RemoteServerError):
    """Raised when the keyword library module or class cannot be loaded."""


class KeywordNotFound(RemoteServerError, LookupError):
    """Raised when a keyword name has no matching operation in the library."""


class UnsupportedArgumentError(RemoteServerError, TypeError):
    """Raised when a keyword argument is outside the supported value types."""

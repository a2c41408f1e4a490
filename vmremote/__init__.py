"""vmremote package."""

__all__ = [
    "cli",
    "coercion",
    "config",
    "constants",
    "docs",
    "exceptions",
    "library",
    "models",
    "runner",
    "server",
    "shutdown",
    "utils",
]

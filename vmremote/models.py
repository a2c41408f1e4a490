"""Data models for the VM remote keyword server."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from vmremote.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    SHUTDOWN_DELAY,
    STATUS_FAIL,
    STATUS_PASS,
)


@dataclass(frozen=True)
class ServerConfig:
    library: str
    library_class: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allow_stop: bool = True
    doc_file: Optional[Path] = None
    shutdown_delay: float = SHUTDOWN_DELAY


@dataclass(frozen=True)
class Keyword:
    """A named operation exposed by a keyword library."""

    name: str
    arguments: Tuple[str, ...]
    shape: str
    func: Callable[..., Any] = field(repr=False, compare=False)
    # Declared parameter types, by position; None where unannotated
    argument_types: Tuple[Optional[type], ...] = ()

    def bind(self, instance: Any) -> Callable[..., Any]:
        """Return the keyword's callable bound to a library instance."""
        return self.func.__get__(instance, type(instance))


@dataclass
class KeywordResult:
    """Result envelope returned by ``run_keyword``."""

    status: str = STATUS_PASS
    output: str = ""
    error: str = ""
    traceback: str = ""
    return_value: str = ""

    @property
    def passed(self) -> bool:
        return self.status == STATUS_PASS

    @classmethod
    def failure(cls, message: str, trail: str = "") -> "KeywordResult":
        return cls(status=STATUS_FAIL, output=message, error=message, traceback=trail)

    def to_dict(self) -> Dict[str, str]:
        """Wire form: the five members of the remote library result struct."""
        return {
            "status": self.status,
            "output": self.output,
            "traceback": self.traceback,
            "error": self.error,
            "return": self.return_value,
        }

"""Utility functions for the VM remote keyword server."""

from __future__ import annotations

import os
import traceback
from typing import Optional

from vmremote.constants import _LOG_VERBOSE
from vmremote.exceptions import ConfigError


def log(level: str, message: str) -> None:
    """Lightweight structured logging compatible with existing colour expectation."""
    if level == "DEBUG" and not _LOG_VERBOSE:
        return
    colours = {
        "INFO": "\033[0;34m",
        "WARN": "\033[1;33m",
        "ERROR": "\033[0;31m",
        "SUCCESS": "\033[0;32m",
        "DEBUG": "\033[0;90m",
    }
    colour = colours.get(level, "")
    reset = "\033[0m" if colour else ""
    print(f"{colour}[{level}]{reset} {message}", flush=True)


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name, default)


def parse_port(raw: str, name: str = "port") -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer (got '{raw}')")
    # 0 asks the OS for a free port
    if value < 0 or value > 65535:
        raise ConfigError(f"{name} must be between 0 and 65535 (got {value})")
    return value


def describe_exception(exc: BaseException) -> str:
    """Return the exception message, or its class name when the message is empty."""
    message = str(exc)
    return message if message else type(exc).__name__


def format_stack_trail(exc: BaseException) -> str:
    """Render the stack frames an exception travelled through, oldest call first."""
    if exc.__traceback__ is None:
        return ""
    return "".join(traceback.format_tb(exc.__traceback__))

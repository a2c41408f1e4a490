"""Keyword execution and result-envelope encoding."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from vmremote.coercion import coerce_arguments
from vmremote.constants import (
    ARRAY_SHAPES,
    SHAPE_BOOL,
    SHAPE_DYNAMIC,
    SCALAR_SHAPES,
    SHUTDOWN_DELAY,
    STATUS_FAIL,
    STATUS_PASS,
    STOP_KEYWORD,
    STOP_OUTPUT_ALLOWED,
    STOP_OUTPUT_DISABLED,
)
from vmremote.library import KeywordLibrary, classify_value
from vmremote.models import KeywordResult
from vmremote.shutdown import schedule_shutdown
from vmremote.utils import describe_exception, format_stack_trail, log


def encode_array(values: Sequence[Any]) -> str:
    """Encode an array return value as ``{v1,v2,}``; the trailing comma is part of the format."""
    return "{" + "".join(f"{value}," for value in values) + "}"


def encode_return(shape: str, value: Any) -> KeywordResult:
    """Build the success envelope for a keyword that returned ``value``."""
    if shape == SHAPE_DYNAMIC:
        shape = classify_value(value)
    if shape in SCALAR_SHAPES and value is not None:
        result = KeywordResult(return_value=str(value))
        if shape == SHAPE_BOOL and not value:
            result.status = STATUS_FAIL
        return result
    if shape in ARRAY_SHAPES and value is not None:
        return KeywordResult(return_value=encode_array(value))
    return KeywordResult()


class KeywordRunner:
    """Run keywords from a library and normalise the outcome into a KeywordResult."""

    def __init__(
        self,
        library: KeywordLibrary,
        allow_stop: bool = True,
        shutdown_delay: float = SHUTDOWN_DELAY,
        shutdown: Callable[[float], Any] = schedule_shutdown,
    ) -> None:
        self.library = library
        self.allow_stop = allow_stop
        self.shutdown_delay = shutdown_delay
        self._shutdown = shutdown

    def stop_remote_server(self) -> KeywordResult:
        if not self.allow_stop:
            log("WARN", "Remote shutdown requested but disabled (--nostopsvr); request ignored")
            return KeywordResult(output=STOP_OUTPUT_DISABLED, return_value="1")
        result = KeywordResult(output=STOP_OUTPUT_ALLOWED, return_value="1")
        self._shutdown(self.shutdown_delay)
        return result

    def run_keyword(self, name: str, args: Sequence[Any] = ()) -> KeywordResult:
        if name == STOP_KEYWORD:
            return self.stop_remote_server()

        keyword = self.library.get(name)
        log("DEBUG", f"Running keyword {name} with {len(args)} argument(s)")
        try:
            values = coerce_arguments(keyword, args)
            instance = self.library.create_instance()
            returned = keyword.bind(instance)(*values)
        except Exception as exc:
            message = describe_exception(exc)
            log("WARN", f"Keyword {name} failed: {message}")
            return KeywordResult.failure(message, format_stack_trail(exc))

        result = encode_return(keyword.shape, returned)
        if result.passed:
            log("DEBUG", f"Keyword {name} passed")
        else:
            log("WARN", f"Keyword {name} returned {result.return_value}")
        return result

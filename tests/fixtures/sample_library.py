"""Keyword library used by the test-suite, loaded from its file path."""

from __future__ import annotations

from typing import Dict, List, Tuple


class BaseKeywords:
    def inherited_keyword(self) -> str:
        return "from base"

    def greet(self, name: str) -> str:
        return f"Base says hello to {name}"


class SampleLibrary(BaseKeywords):
    """Exercises every return shape the runner knows about."""

    def __init__(self) -> None:
        self.calls = 0

    def add_numbers(self, first: int, second: int) -> int:
        return first + second

    def greet(self, name: str) -> str:
        return f"Hello, {name}!"

    def is_even(self, number: int) -> bool:
        return number % 2 == 0

    def list_numbers(self, count: int) -> List[int]:
        return list(range(1, count + 1))

    def list_names(self) -> List[str]:
        return ["alpha", "beta"]

    def list_flags(self) -> Tuple[bool, ...]:
        return (True, False)

    def empty_list(self) -> List[int]:
        return []

    def do_nothing(self) -> None:
        print("this output is not captured")

    def get_mapping(self) -> Dict[str, int]:
        return {"a": 1}

    def untyped_value(self, value):
        return value

    def count_calls(self) -> int:
        self.calls += 1
        return self.calls

    def join_words(self, separator: str, *words) -> str:
        return separator.join(words)

    def raise_error(self, message):
        raise RuntimeError(message)

    def raise_empty(self):
        raise KeyError()

    @staticmethod
    def static_echo(value: str) -> str:
        return value

    @classmethod
    def class_label(cls) -> str:
        return cls.__name__

    @property
    def version(self) -> str:
        return "1.0"

    def _private_helper(self) -> None:
        raise AssertionError("private helpers are not keywords")


class NeedsArguments:
    def __init__(self, host: str) -> None:
        self.host = host

    def ping(self) -> bool:
        return True

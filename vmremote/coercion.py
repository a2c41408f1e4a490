"""Coercion of XML-RPC keyword arguments into keyword parameter values.

Arguments arrive as loosely-typed XML-RPC values. Each one must be a scalar
(None, bool, int or str) or a flat list of scalars; anything else (floats,
structs, binary, dates, nested lists) is rejected. Scalars are converted to
the parameter's declared type when it is annotated as int, bool or str.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from vmremote.constants import FALSY, TRUTHY
from vmremote.exceptions import UnsupportedArgumentError
from vmremote.models import Keyword

_SCALAR_TYPES = (bool, int, str)


def _check_scalar(value: Any, position: int) -> Any:
    if value is None or type(value) in _SCALAR_TYPES:
        return value
    raise UnsupportedArgumentError(
        f"Argument {position} has unsupported type '{type(value).__name__}'; "
        "expected int, str, bool, None or a list of those"
    )


def _to_bool(value: Any, position: int) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY:
            return True
        if lowered in FALSY:
            return False
    raise UnsupportedArgumentError(f"Argument {position} cannot be converted to bool (got {value!r})")


def _to_int(value: Any, position: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise UnsupportedArgumentError(f"Argument {position} cannot be converted to int (got {value!r})")


def _to_str(value: Any, position: int) -> str:
    return value if isinstance(value, str) else str(value)


_CONVERTERS = {bool: _to_bool, int: _to_int, str: _to_str}


def coerce_argument(value: Any, target: Optional[type] = None, position: int = 1) -> Any:
    if isinstance(value, (list, tuple)):
        return [_check_scalar(item, position) for item in value]
    value = _check_scalar(value, position)
    if value is None or target is None:
        return value
    return _CONVERTERS[target](value, position)


def coerce_arguments(keyword: Keyword, args: Sequence[Any]) -> List[Any]:
    """Validate and convert positional arguments for ``keyword``."""
    coerced = []
    for index, value in enumerate(args):
        target = keyword.argument_types[index] if index < len(keyword.argument_types) else None
        coerced.append(coerce_argument(value, target, position=index + 1))
    return coerced

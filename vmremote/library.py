"""Keyword library loading and the keyword catalog.

A keyword library is any default-constructible class. Its public methods are
discovered once, when the library is loaded, and kept in an explicit
name -> Keyword registry that the runner and the XML-RPC service read from.
"""

from __future__ import annotations

import collections.abc
import importlib
import importlib.util
import inspect
import sys
import types
import typing
from pathlib import Path
from typing import Any, Dict, List, Optional

from vmremote.constants import (
    SHAPE_ARRAY_BOOL,
    SHAPE_ARRAY_INT,
    SHAPE_ARRAY_STR,
    SHAPE_BOOL,
    SHAPE_DYNAMIC,
    SHAPE_INT,
    SHAPE_NONE,
    SHAPE_OTHER,
    SHAPE_STR,
    STOP_KEYWORD,
)
from vmremote.exceptions import KeywordNotFound, LibraryLoadError
from vmremote.models import Keyword
from vmremote.utils import log

_SCALAR_ANNOTATIONS = {bool: SHAPE_BOOL, int: SHAPE_INT, str: SHAPE_STR}
_ARRAY_ANNOTATIONS = {bool: SHAPE_ARRAY_BOOL, int: SHAPE_ARRAY_INT, str: SHAPE_ARRAY_STR}
_SEQUENCE_ORIGINS = {list, tuple, collections.abc.Sequence, collections.abc.MutableSequence}


def classify_annotation(annotation: Any) -> str:
    """Map a declared return annotation to a return shape."""
    if annotation is None or annotation is type(None):
        return SHAPE_NONE
    if annotation in _SCALAR_ANNOTATIONS:
        return _SCALAR_ANNOTATIONS[annotation]
    if annotation in _SEQUENCE_ORIGINS:
        # element type unknown until the keyword returns
        return SHAPE_DYNAMIC
    origin = typing.get_origin(annotation)
    if origin in (typing.Union, types.UnionType):
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return classify_annotation(members[0])
        return SHAPE_OTHER
    if origin in _SEQUENCE_ORIGINS:
        element_types = {arg for arg in typing.get_args(annotation) if arg is not Ellipsis}
        if len(element_types) == 1:
            element = element_types.pop()
            if element in _ARRAY_ANNOTATIONS:
                return _ARRAY_ANNOTATIONS[element]
    return SHAPE_OTHER


def classify_value(value: Any) -> str:
    """Classify a returned value for keywords that declare no return type."""
    if value is None:
        return SHAPE_NONE
    if type(value) in _SCALAR_ANNOTATIONS:
        return _SCALAR_ANNOTATIONS[type(value)]
    if isinstance(value, (list, tuple)):
        element_types = {type(item) for item in value}
        if not element_types:
            return SHAPE_ARRAY_STR
        if len(element_types) == 1:
            element = element_types.pop()
            if element in _ARRAY_ANNOTATIONS:
                return _ARRAY_ANNOTATIONS[element]
    return SHAPE_OTHER


def _type_hints(func) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError) as exc:
        log("DEBUG", f"Cannot resolve annotations of {func.__qualname__}: {exc}")
        return {}


def _build_keyword(name: str, attr: Any) -> Keyword:
    func = attr.__func__ if isinstance(attr, (staticmethod, classmethod)) else attr
    params = list(inspect.signature(func).parameters.values())
    if not isinstance(attr, staticmethod) and params:
        params = params[1:]  # self / cls

    arguments: List[str] = []
    argument_types: List[Optional[type]] = []
    hints = _type_hints(func)
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            arguments.append(f"*{param.name}")
        elif param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            arguments.append(param.name)
            hint = hints.get(param.name)
            argument_types.append(hint if hint in _SCALAR_ANNOTATIONS else None)

    shape = classify_annotation(hints["return"]) if "return" in hints else SHAPE_DYNAMIC
    return Keyword(
        name=name,
        arguments=tuple(arguments),
        shape=shape,
        func=attr,
        argument_types=tuple(argument_types),
    )


def discover_keywords(library_class: type) -> Dict[str, Keyword]:
    """Build the keyword registry for a library class, in definition order."""
    registry: Dict[str, Keyword] = {}
    for klass in library_class.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name.startswith("_") or name in registry:
                continue
            if not (inspect.isfunction(attr) or isinstance(attr, (staticmethod, classmethod))):
                continue
            if name == STOP_KEYWORD:
                log("WARN", f"{library_class.__name__}.{name} is shadowed by the built-in {STOP_KEYWORD}")
                continue
            registry[name] = _build_keyword(name, attr)
    return registry


class KeywordLibrary:
    """Catalog of the keywords exposed by a loaded library class."""

    def __init__(self, library_class: type) -> None:
        self.library_class = library_class
        self.name = library_class.__name__
        self._keywords = discover_keywords(library_class)

    def __contains__(self, name: str) -> bool:
        return name in self._keywords

    def keyword_names(self) -> List[str]:
        return list(self._keywords) + [STOP_KEYWORD]

    def keyword_arguments(self, name: str) -> List[str]:
        if name == STOP_KEYWORD:
            return []
        return list(self.get(name).arguments)

    def get(self, name: str) -> Keyword:
        try:
            return self._keywords[name]
        except KeyError:
            raise KeywordNotFound(f"No keyword named '{name}' in library {self.name}") from None

    def create_instance(self) -> Any:
        return self.library_class()


def _import_module(module_ref: str):
    path = Path(module_ref)
    if path.suffix == ".py":
        if not path.is_file():
            raise LibraryLoadError(f"Keyword library file not found: {path}")
        spec = importlib.util.spec_from_file_location(f"vmremote_library_{path.stem}", path)
        if spec is None or spec.loader is None:
            raise LibraryLoadError(f"Cannot load keyword library from {path}")
        module = importlib.util.module_from_spec(spec)
        # dataclasses and postponed annotations resolve names through sys.modules
        sys.modules[spec.name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(spec.name, None)
            raise
        return module
    return importlib.import_module(module_ref)


def load_library(module_ref: str, class_name: str) -> KeywordLibrary:
    """Import ``class_name`` from a dotted module name or a ``.py`` file path."""
    try:
        module = _import_module(module_ref)
    except LibraryLoadError:
        raise
    except Exception as exc:
        raise LibraryLoadError(f"Failed to import keyword library '{module_ref}': {exc}") from exc

    library_class = getattr(module, class_name, None)
    if not inspect.isclass(library_class):
        raise LibraryLoadError(f"Keyword library class '{class_name}' not found in '{module_ref}'")

    try:
        parameters = inspect.signature(library_class).parameters.values()
    except (TypeError, ValueError):
        parameters = []
    required = [
        param.name
        for param in parameters
        if param.default is inspect.Parameter.empty
        and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    if required:
        raise LibraryLoadError(
            f"Keyword library class '{class_name}' must be constructible without arguments "
            f"(requires: {', '.join(required)})"
        )

    library = KeywordLibrary(library_class)
    log("DEBUG", f"Loaded {len(library.keyword_names()) - 1} keyword(s) from {module_ref}.{class_name}")
    return library

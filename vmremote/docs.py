"""Keyword documentation lookup.

Documentation is read from an external file keyed by ``{LibraryClass}.{keyword}``.
Two formats are understood:

* ``.xml`` -- compiler-generated API documentation
  (``<doc><members><member name="M:Class.keyword(...)">`` with ``summary``,
  ``param`` and ``returns`` children);
* ``.yaml`` / ``.yml`` -- a ``keywords`` mapping of the same keys to
  ``summary``, ``params`` (name -> text) and ``returns``.

Missing or partial entries are never an error: whatever is found is returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from xml.etree.ElementTree import Element, ParseError, parse

try:
    import yaml  # type: ignore
except ImportError as exc:  # pragma: no cover
    raise SystemExit("PyYAML is required but not installed") from exc

from vmremote.constants import STOP_KEYWORD, STOP_KEYWORD_DOC
from vmremote.utils import log

_LOOKUP_ERRORS = (KeyError, TypeError, AttributeError)


def _clean_text(text: str) -> str:
    lines = [line.strip() for line in text.strip().splitlines()]
    return "\n".join(lines)


class XmlDocumentation:
    def __init__(self, root: Element) -> None:
        self.root = root

    def _member(self, key: str) -> Element:
        wanted = f"M:{key}"
        for member in self.root.iter("member"):
            name = member.get("name", "")
            if name == wanted or name.startswith(wanted + "("):
                return member
        raise KeyError(key)

    def _child_text(self, key: str, tag: str) -> str:
        element = self._member(key).find(tag)
        if element is None:
            raise KeyError(f"{key}/{tag}")
        return _clean_text("".join(element.itertext()))

    def summary(self, key: str) -> str:
        return self._child_text(key, "summary")

    def params(self, key: str) -> List[Tuple[str, str]]:
        return [
            (param.get("name", ""), _clean_text("".join(param.itertext())))
            for param in self._member(key).findall("param")
        ]

    def returns(self, key: str) -> str:
        return self._child_text(key, "returns")


class YamlDocumentation:
    def __init__(self, data: Dict[str, Any]) -> None:
        self.keywords = data.get("keywords") or {}

    def _section(self, key: str, section: str) -> str:
        value = self.keywords[key][section]
        if value is None:
            raise KeyError(f"{key}/{section}")
        return _clean_text(str(value))

    def summary(self, key: str) -> str:
        return self._section(key, "summary")

    def params(self, key: str) -> List[Tuple[str, str]]:
        params = self.keywords[key].get("params") or {}
        return [(str(name), _clean_text(str(text))) for name, text in params.items()]

    def returns(self, key: str) -> str:
        return self._section(key, "returns")


def load_documentation(path: Optional[Path]):
    """Load a documentation source, or return None if it cannot be read."""
    if path is None:
        return None
    suffix = path.suffix.lower()
    try:
        if suffix == ".xml":
            return XmlDocumentation(parse(path).getroot())
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                log("WARN", f"Keyword documentation {path} is not a mapping; documentation disabled")
                return None
            return YamlDocumentation(data)
    except (OSError, ValueError, ParseError, yaml.YAMLError) as exc:
        log("WARN", f"Failed to load keyword documentation {path}: {exc}")
        return None
    log("WARN", f"Unsupported keyword documentation format '{path.suffix}'; documentation disabled")
    return None


class DocumentationResolver:
    """Render the documentation string for a keyword."""

    def __init__(self, source, library_name: str) -> None:
        self.source = source
        self.library_name = library_name

    def describe(self, name: str) -> str:
        if name == STOP_KEYWORD:
            return STOP_KEYWORD_DOC
        if self.source is None:
            return ""

        key = f"{self.library_name}.{name}"
        doc = ""
        try:
            doc += self.source.summary(key) + "\n\n"
        except _LOOKUP_ERRORS:
            log("DEBUG", f"No summary documented for {key}")
        try:
            params = self.source.params(key)
            if params:
                doc += "".join(f"{param}: {text}\n" for param, text in params) + "\n"
        except _LOOKUP_ERRORS:
            log("DEBUG", f"No parameters documented for {key}")
        try:
            doc += "Returns: " + self.source.returns(key)
        except _LOOKUP_ERRORS:
            log("DEBUG", f"No return value documented for {key}")
        return doc

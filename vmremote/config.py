"""Configuration from command-line flags and environment variables."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from vmremote.constants import (
    DEFAULT_DOC_FILE,
    DEFAULT_LIBRARY,
    DEFAULT_LIBRARY_CLASS,
    ENV_DOC_FILE,
    ENV_LIBRARY,
    ENV_LIBRARY_CLASS,
)
from vmremote.exceptions import ConfigError
from vmremote.models import ServerConfig
from vmremote.utils import get_env, parse_port


def resolve_doc_file(library: str) -> Optional[Path]:
    """Documentation path from REMOTE_LIBRARY_DOC; an empty value disables documentation."""
    raw = get_env(ENV_DOC_FILE)
    if raw is None:
        # Bundled documentation only describes the bundled library
        return DEFAULT_DOC_FILE if library == DEFAULT_LIBRARY else None
    raw = raw.strip()
    return Path(raw) if raw else None


def parse_env(args: argparse.Namespace) -> ServerConfig:
    library = (get_env(ENV_LIBRARY) or DEFAULT_LIBRARY).strip()
    library_class = (get_env(ENV_LIBRARY_CLASS) or DEFAULT_LIBRARY_CLASS).strip()
    if not library or not library_class:
        raise ConfigError(f"{ENV_LIBRARY} and {ENV_LIBRARY_CLASS} must not be blank")

    host = args.host.strip()
    if not host:
        raise ConfigError("--host must not be empty")

    return ServerConfig(
        library=library,
        library_class=library_class,
        host=host,
        port=parse_port(args.port, "--port"),
        allow_stop=not args.nostopsvr,
        doc_file=resolve_doc_file(library),
    )

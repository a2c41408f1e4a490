"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from vmremote.docs import DocumentationResolver
from vmremote.library import KeywordLibrary, load_library
from vmremote.runner import KeywordRunner
from vmremote.server import RemoteLibraryService

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
SAMPLE_LIBRARY_PATH = FIXTURES_DIR / "sample_library.py"

SAMPLE_KEYWORDS = [
    "add_numbers",
    "greet",
    "is_even",
    "list_numbers",
    "list_names",
    "list_flags",
    "empty_list",
    "do_nothing",
    "get_mapping",
    "untyped_value",
    "count_calls",
    "join_words",
    "raise_error",
    "raise_empty",
    "static_echo",
    "class_label",
    "inherited_keyword",
]


@pytest.fixture
def sample_library_path() -> Path:
    return SAMPLE_LIBRARY_PATH


@pytest.fixture
def sample_keywords() -> List[str]:
    return list(SAMPLE_KEYWORDS)


@pytest.fixture
def sample_library() -> KeywordLibrary:
    """Return the catalog of tests/fixtures/sample_library.py:SampleLibrary."""
    return load_library(str(SAMPLE_LIBRARY_PATH), "SampleLibrary")


@pytest.fixture
def shutdown_requests() -> List[float]:
    """Delays passed to the runner's shutdown hook, instead of exiting the test process."""
    return []


@pytest.fixture
def runner(sample_library, shutdown_requests) -> KeywordRunner:
    return KeywordRunner(sample_library, allow_stop=True, shutdown=shutdown_requests.append)


@pytest.fixture
def service(sample_library, runner) -> RemoteLibraryService:
    return RemoteLibraryService(sample_library, runner, DocumentationResolver(None, sample_library.name))


@pytest.fixture
def mock_env(monkeypatch):
    """Helper to set environment variables for tests."""

    def _set(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, str(value))

    return _set

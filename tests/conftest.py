"""Shared test fixtures for the ssml_parser test suite."""

from __future__ import annotations

import pytest
from samples import CUSTOM_TAGS_EXAMPLE, SIMPLE_EXAMPLE

from ssml_parser import SSMLParser


@pytest.fixture()
def parser() -> SSMLParser:
    return SSMLParser()


@pytest.fixture()
def expanding_parser() -> SSMLParser:
    return SSMLParser(expand_sub=True)


@pytest.fixture()
def simple_example() -> str:
    return SIMPLE_EXAMPLE


@pytest.fixture()
def custom_tags_example() -> str:
    return CUSTOM_TAGS_EXAMPLE


@pytest.fixture()
def ssml_file(tmp_path):
    """Write SIMPLE_EXAMPLE to a temporary file and return its path."""
    path = tmp_path / "simple.ssml"
    path.write_text(SIMPLE_EXAMPLE, encoding="utf-8")
    return path

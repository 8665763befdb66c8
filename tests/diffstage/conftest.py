"""Shared fixtures for diffstage tests."""

import pytest

from diffstage.diff_parser import DiffParser


@pytest.fixture
def parser():
    """Create a diff parser."""
    return DiffParser()


@pytest.fixture
def parse(parser):
    """Factory parsing diff text into a document."""
    def _parse(diff_text: str):
        return parser.parse(diff_text)
    return _parse

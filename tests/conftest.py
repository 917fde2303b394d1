"""Shared fixtures for the actionfinder tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path for importing without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from actionfinder.buffers import BufferEvents, TextBuffer
from actionfinder.parser import Parser


@pytest.fixture
def events():
    return BufferEvents()


@pytest.fixture
def parser(events):
    parser = Parser(events)
    yield parser
    parser.dispose()


@pytest.fixture
def make_buffer(events):
    def _make(text: str, file_path: str = None) -> TextBuffer:
        return TextBuffer(text, file_path=file_path, events=events)
    return _make

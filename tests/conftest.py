"""Pytest configuration and global fixtures for couchdoc tests."""

import pytest

from couchdoc import Document

# Import shared fixtures
from tests.fixtures.common import (  # noqa: F401
    doc_with_attachments,
    hello_payload,
    mixed_payload,
)


@pytest.fixture
def empty_doc() -> Document:
    return Document()

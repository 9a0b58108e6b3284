"""Shared test fixtures for all test types."""

import pytest

from couchdoc import Document


@pytest.fixture
def hello_payload() -> str:
    """A document with one inline text attachment ("hello")."""
    return (
        '{"_id":"doc1","_attachments":'
        '{"a.txt":{"content_type":"text/plain","data":"aGVsbG8="}}}'
    )


@pytest.fixture
def mixed_payload() -> str:
    """Attachments in non-alphabetical order: inline data, stub, follows placeholder."""
    return (
        '{"_id":"mixed","_rev":"1-abc","title":"Mixed","_attachments":{'
        '"b.bin":{"content_type":"application/octet-stream","data":"AAEC"},'
        '"a.txt":{"content_type":"text/plain","length":3,"digest":"md5-x","stub":true},'
        '"c.png":{"content_type":"image/png","length":4,"follows":true}'
        '},"tags":["x","y"]}'
    )


@pytest.fixture
def doc_with_attachments() -> Document:
    """A document holding two attachments with data, "x" before "y"."""
    return (
        Document.new("doc-x", "1-rev")
        .put("type", "note")
        .put_attachment("x", b"first", "text/plain")
        .put_attachment("y", b"second", "text/plain", digest="md5-abc")
    )

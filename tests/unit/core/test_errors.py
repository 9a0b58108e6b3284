"""
Tests for couchdoc Error Classification System.

These tests verify the error hierarchy and the context carried by:
- Decode errors
- Consistency errors
- Usage errors
"""

import pytest

from couchdoc.errors import (
    CouchDocError,
    DecodeError,
    InconsistentDocumentError,
    MissingAttachmentError,
    UnsupportedOperationError,
)


@pytest.mark.unit
class TestCouchDocError:
    """Tests for base CouchDocError class."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = CouchDocError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details == {}
        assert error.original_error is None

    def test_default_message(self):
        assert CouchDocError().message == "Document error"

    def test_context_rendered_as_key_values(self):
        """Keyword context is kept in details and shown after the message."""
        error = CouchDocError("Failed to encode", doc_id="123", count=2)
        assert error.details == {"doc_id": "123", "count": 2}
        assert str(error) == "Failed to encode (doc_id='123', count=2)"

    def test_chained_cause(self):
        """The exception given to ``raise ... from`` is the original error."""
        original = ValueError("Original error")
        with pytest.raises(CouchDocError) as exc_info:
            try:
                raise original
            except ValueError as e:
                raise CouchDocError("Wrapped error") from e
        assert exc_info.value.original_error is original

    def test_to_dict_is_flat(self):
        """Test error serialization to a flat log record."""
        error = CouchDocError("Test error", key="value")
        error.__cause__ = RuntimeError("Runtime issue")
        assert error.to_dict() == {
            "error": "CouchDocError",
            "message": "Test error",
            "key": "value",
            "cause": "RuntimeError: Runtime issue",
        }

    def test_to_dict_without_cause(self):
        assert "cause" not in CouchDocError("plain").to_dict()


@pytest.mark.unit
class TestDomainErrors:
    """Tests for the concrete error types."""

    @pytest.mark.parametrize(
        "error_cls",
        [DecodeError, InconsistentDocumentError, UnsupportedOperationError],
    )
    def test_hierarchy(self, error_cls):
        assert issubclass(error_cls, CouchDocError)

    def test_decode_error_default_message(self):
        assert "decode" in DecodeError().message.lower()

    def test_inconsistent_default_message(self):
        error = InconsistentDocumentError(attachments=["a", "b"], order=["a"])
        assert "inconsistent" in error.message.lower()
        assert error.details["order"] == ["a"]

    def test_missing_attachment_carries_name(self):
        error = MissingAttachmentError("nope")
        assert isinstance(error, CouchDocError)
        assert error.name == "nope"
        assert error.details == {"name": "nope"}
        assert str(error) == "No attachment named 'nope' (name='nope')"

    def test_missing_attachment_custom_message(self):
        error = MissingAttachmentError("a.txt", message="gone")
        assert error.message == "gone"
        assert error.details["name"] == "a.txt"

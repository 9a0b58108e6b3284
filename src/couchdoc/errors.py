"""
couchdoc Error Classification System.

This module provides the exceptions raised while decoding, mutating and
encoding documents.

Error Categories:
-----------------
1. Decode Errors: The wire payload cannot be turned into a Document
   - Invalid UTF-8 or JSON text
   - Top level value is not an object
   - Attachment entry is not an object

2. Consistency Errors: The in-memory state cannot be serialized
   - Attachment order disagrees with the attachment metadata

3. Usage Errors: The caller used the wrong entry point
   - Attachment data written for an unknown attachment
   - Generic put on the "_attachments" field

Malformed base64 inside an attachment is not an error: the decoder keeps
the raw entry and logs a warning.

Usage:
------
    from couchdoc.errors import CouchDocError, DecodeError

    try:
        doc = from_wire(payload)
    except DecodeError as e:
        logger.error(f"Rejected payload: {e}")
"""

from typing import Any


class CouchDocError(Exception):
    """
    Base exception for all couchdoc errors.

    Context about the offending document part is given as keyword arguments
    and kept in ``details``. The exception that triggered the error is the
    one chained with ``raise ... from``.

    Attributes:
        message: Human-readable error description
        details: Keyword context, e.g. the attachment name
    """

    default_message = "Document error"

    def __init__(self, message: str | None = None, **details: Any):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def original_error(self) -> BaseException | None:
        """The chained exception, if any."""
        return self.__cause__

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> dict[str, Any]:
        """Flat record for structured log output."""
        record = {"error": type(self).__name__, "message": self.message, **self.details}
        if self.__cause__ is not None:
            record["cause"] = f"{type(self.__cause__).__name__}: {self.__cause__}"
        return record


# =============================================================================
# Codec Errors
# =============================================================================

class DecodeError(CouchDocError):
    """
    Raised when a wire payload cannot be decoded into a Document.

    Common causes:
    - Payload is not valid UTF-8 or JSON
    - Top level JSON value is not an object
    - An "_attachments" entry is not an object
    """

    default_message = "Failed to decode document"


class InconsistentDocumentError(CouchDocError):
    """
    Raised when a Document's attachment order disagrees with its metadata.

    Only detected at encode time. It means the document was assembled
    without the attachment accessors, since those keep the order in step
    with the "_attachments" field.
    """

    default_message = "Document attachments inconsistent"


# =============================================================================
# Usage Errors
# =============================================================================

class MissingAttachmentError(CouchDocError):
    """
    Raised when attachment data is written for a name without metadata.

    Call put_attachment_info() or put_attachment() first.

    Attributes:
        name: The attachment name that was not found
    """

    def __init__(self, name: str, message: str | None = None):
        super().__init__(message or f"No attachment named '{name}'", name=name)
        self.name = name


class UnsupportedOperationError(CouchDocError):
    """Raised when a generic field operation cannot keep the document consistent."""

    default_message = "Operation not supported on this field"

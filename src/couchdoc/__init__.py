"""
couchdoc - CouchDB-style documents with ordered binary attachments.

This package keeps a document's attachment metadata, attachment order and
attachment payloads consistent through decoding, mutation and encoding.
"""

__version__ = "0.1.0"

# Core entities
from .core.document import POP, Document

# Codec
from .codec import MultipartBody, encode_multipart, from_wire, multipart_parts, to_wire

# Configuration
from .config import EncodeOptions, Settings, configure_logging, settings

# Errors
from .errors import (
    CouchDocError,
    DecodeError,
    InconsistentDocumentError,
    MissingAttachmentError,
    UnsupportedOperationError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Document",
    "POP",
    # Codec
    "from_wire",
    "to_wire",
    "encode_multipart",
    "multipart_parts",
    "MultipartBody",
    # Config
    "EncodeOptions",
    "Settings",
    "settings",
    "configure_logging",
    # Errors
    "CouchDocError",
    "DecodeError",
    "InconsistentDocumentError",
    "MissingAttachmentError",
    "UnsupportedOperationError",
]

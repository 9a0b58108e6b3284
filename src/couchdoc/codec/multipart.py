"""multipart/related bodies for documents with attachments.

The first part is the JSON document encoded with ``multipart=True``; the
attachments holding data follow as separate parts, in attachment order, so
they line up with the ``"follows": true`` entries in the JSON.
"""

from collections.abc import Iterator
from uuid import uuid4

from loguru import logger
from pydantic import BaseModel

from ..config.settings import settings
from ..core.document import Document
from .json_codec import to_wire

CRLF = b"\r\n"


class MultipartBody(BaseModel):
    """An encoded multipart/related request body."""

    boundary: str
    body: bytes

    model_config = {
        "frozen": True,
    }

    @property
    def content_type(self) -> str:
        return f'multipart/related; boundary="{self.boundary}"'


def multipart_parts(doc: Document) -> Iterator[tuple[str, str, bytes]]:
    """Yield ``(name, content_type, data)`` for each attachment with data, in wire order."""
    for name, data in doc.get_attachment_data():
        if data is None:
            continue
        info = doc.get_attachment_info(name) or {}
        yield name, info.get("content_type") or settings.DEFAULT_CONTENT_TYPE, data


def _header_value(value) -> str:
    # Line breaks would start a new header line
    return str(value).replace("\r", "").replace("\n", "")


def _quote(name: str) -> str:
    return _header_value(name).replace("\\", "\\\\").replace('"', '\\"')


def encode_multipart(doc: Document, boundary: str | None = None) -> MultipartBody:
    """Encode ``doc`` and its attachment data as a multipart/related body.

    Args:
        doc: The document to encode
        boundary: Part boundary (random if not given)

    Returns:
        The body together with its boundary

    Raises:
        InconsistentDocumentError: If the attachment order and metadata
            disagree
    """
    boundary = boundary or uuid4().hex
    delimiter = f"--{boundary}".encode("ascii")

    chunks = [
        delimiter, CRLF,
        b"Content-Type: application/json", CRLF, CRLF,
        to_wire(doc, multipart=True).encode("utf-8"), CRLF,
    ]
    count = 0
    for name, content_type, data in multipart_parts(doc):
        headers = (
            f'Content-Disposition: attachment; filename="{_quote(name)}"\r\n'
            f"Content-Type: {_header_value(content_type)}\r\n"
            f"Content-Length: {len(data)}\r\n"
        )
        chunks += [delimiter, CRLF, headers.encode("utf-8"), CRLF, data, CRLF]
        count += 1
    chunks += [delimiter, b"--"]

    logger.debug(f"Encoded multipart body with {count} attachment parts")
    return MultipartBody(boundary=boundary, body=b"".join(chunks))

"""JSON wire codec for documents.

Decoding moves inline base64 attachment data into the document's payload
table and records the order in which attachments were found. Encoding walks
the attachments in that recorded order, so the JSON entries line up with
the body parts of a multipart request.
"""

import base64
import binascii
import copy
import json
from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic import ValidationError

from ..config.models import EncodeOptions
from ..core.attachments import ATTACHMENTS
from ..core.document import Document
from ..errors import DecodeError, InconsistentDocumentError


def _parse(payload: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(payload, Mapping):
        return copy.deepcopy(dict(payload))

    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = bytes(payload).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Payload is not valid UTF-8") from e

    if not isinstance(payload, str):
        raise DecodeError(
            "Cannot decode payload",
            type=type(payload).__name__,
        )

    try:
        value = json.loads(payload)
    except json.JSONDecodeError as e:
        raise DecodeError("Payload is not valid JSON") from e

    if not isinstance(value, dict):
        raise DecodeError(
            "Top level JSON value must be an object",
            type=type(value).__name__,
        )
    return value


def _decode_base64(data: Any) -> bytes | None:
    if not isinstance(data, str):
        return None
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None


def _build(fields: dict[str, Any], order: list[str], data: dict[str, bytes]) -> Document:
    try:
        return Document(fields=fields, attachment_order=order, attachment_data=data)
    except ValidationError as e:
        raise DecodeError("Invalid document identity") from e


def from_wire(payload: str | bytes | Mapping[str, Any]) -> Document:
    """Decode a document from JSON text, UTF-8 bytes or a parsed object.

    Attachments carrying inline ``data`` are decoded into the payload table
    and their metadata is turned into a stub with the decoded ``length``.
    Entries without data become stubs; a multipart ``follows`` marker is
    dropped since this call does not read body parts.

    An attachment whose data is not valid base64 keeps its raw metadata and
    gets no payload. The rest of the document still decodes.

    Args:
        payload: The wire representation

    Returns:
        The decoded Document

    Raises:
        DecodeError: If the payload is not a JSON object, or an attachment
            entry is not an object
    """
    fields = _parse(payload)
    atts = fields.get(ATTACHMENTS)
    if not isinstance(atts, dict) or not atts:
        return _build(fields, [], {})

    normalized: dict[str, Any] = {}
    order: list[str] = []
    data: dict[str, bytes] = {}

    for name, info in atts.items():
        if not isinstance(info, dict):
            raise DecodeError(
                "Attachment info must be an object",
                name=name,
                type=type(info).__name__,
            )
        order.append(name)

        if "data" not in info:
            if info.get("stub") is True:
                normalized[name] = info
            else:
                stub = {k: v for k, v in info.items() if k != "follows"}
                stub["stub"] = True
                normalized[name] = stub
            continue

        content = _decode_base64(info["data"])
        if content is None:
            # Kept as received; the entry still counts towards the order.
            logger.warning(f"Attachment '{name}' has undecodable data, keeping raw entry")
            normalized[name] = info
            continue

        stub = {k: v for k, v in info.items() if k not in ("data", "follows")}
        stub["stub"] = True
        stub["length"] = len(content)
        normalized[name] = stub
        data[name] = content

    logger.debug(
        f"Decoded document with {len(order)} attachments ({len(data)} with data)"
    )
    return _build({**fields, ATTACHMENTS: normalized}, order, data)


def check_consistency(doc: Document) -> None:
    """Raise if the attachment order does not match the attachment metadata.

    Raises:
        InconsistentDocumentError: If the order is empty, has a different
            length or names other attachments than the metadata
    """
    atts = doc.fields.get(ATTACHMENTS)
    if not isinstance(atts, dict) or not atts:
        return
    order = doc.attachment_order
    if not order or len(order) != len(atts) or set(order) != atts.keys():
        raise InconsistentDocumentError(
            attachments=sorted(atts), order=list(order)
        )


def _encode_attachment(info: dict[str, Any], data: bytes | None, multipart: bool) -> dict[str, Any]:
    # "data" and "follows" are transport markers and never appear together
    if data is None:
        if "follows" not in info:
            return info
        return {k: v for k, v in info.items() if k != "follows"}
    if multipart:
        att = {k: v for k, v in info.items() if k not in ("stub", "data")}
        att["follows"] = True
        return att
    att = {k: v for k, v in info.items() if k not in ("stub", "length", "follows")}
    att["data"] = base64.b64encode(data).decode("ascii")
    return att


def to_wire_value(doc: Document, multipart: bool = False) -> dict[str, Any]:
    """Build the JSON object for ``doc`` with attachments in recorded order.

    Raises:
        InconsistentDocumentError: See ``check_consistency``
    """
    check_consistency(doc)

    value: dict[str, Any] = {}
    for key, field in doc.fields.items():
        if key == ATTACHMENTS and isinstance(field, dict) and field:
            field = {
                name: _encode_attachment(field[name], doc.attachment_data.get(name), multipart)
                for name in doc.attachment_order
            }
        value[key] = field
    return value


def to_wire(doc: Document, options: EncodeOptions | None = None, **overrides: Any) -> str:
    """Serialize ``doc`` to JSON text.

    Attachments holding data are inlined as base64, or marked with
    ``"follows": true`` when ``multipart`` is set. Attachments without data
    are written as their stubs.

    Args:
        doc: The document to encode
        options: Encode options (defaults to compact, non-multipart)
        **overrides: Individual option values, e.g. ``pretty=True``

    Returns:
        The JSON text

    Raises:
        InconsistentDocumentError: If the attachment order and metadata
            disagree

    Example:
        >>> to_wire(doc, multipart=True)
        '{"_id":"doc1","_attachments":{"a.txt":{...,"follows":true}}}'
    """
    options = options or EncodeOptions()
    if overrides:
        options = EncodeOptions(**{**options.model_dump(), **overrides})

    value = to_wire_value(doc, options.multipart)
    if options.pretty:
        return json.dumps(value, indent=options.indent, ensure_ascii=False)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

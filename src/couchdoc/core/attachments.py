"""Attachment accessors for documents.

Attachments live in three places that must agree with each other:

- the metadata map under the "_attachments" field,
- ``attachment_order``, the order in which they are serialized,
- ``attachment_data``, the locally held payloads.

Multipart transmission requires the JSON entries and the body parts to
appear in the same order, so the order is tracked explicitly instead of
relying on the metadata map. New attachments are always appended; updating
an existing one never moves it.
"""

from typing import Any

from loguru import logger

from ..config.settings import settings
from ..errors import MissingAttachmentError

ATTACHMENTS = "_attachments"


def build_attachment_info(
    data: bytes, content_type: str, digest: str | None = None
) -> dict[str, Any]:
    """Build the stub metadata describing ``data``."""
    info: dict[str, Any] = {"content_type": content_type}
    if digest is not None:
        info["digest"] = digest
    info["length"] = len(data)
    info["stub"] = True
    return info


class AttachmentMixin:
    """Attachment operations for Document.

    Every method that changes something returns a new document and leaves
    ``self`` untouched.
    """

    def _attachment_map(self) -> dict[str, Any]:
        atts = self.fields.get(ATTACHMENTS)
        return atts if isinstance(atts, dict) else {}

    def _with_attachment_info(self, name: str, info: dict[str, Any], **update: Any):
        atts = self._attachment_map()
        order = self.attachment_order
        if name not in atts:
            order = [*order, name]
        fields = {**self.fields, ATTACHMENTS: {**atts, name: info}}
        return self.model_copy(update={"fields": fields, "attachment_order": order, **update})

    def get_attachment_info(self, name: str) -> dict[str, Any] | None:
        """Return the metadata (stub) of attachment ``name`` or None."""
        return self._attachment_map().get(name)

    def has_attachment(self, name: str) -> bool:
        return name in self._attachment_map()

    def has_attachment_data(self, name: str) -> bool:
        """Whether a payload is held for ``name``. Empty payloads count."""
        return name in self.attachment_data

    def get_attachment_data(self, name: str | None = None):
        """Return the payload of ``name``, or all payloads in wire order.

        Without a name, returns ``(name, bytes | None)`` pairs for every
        attachment in ``attachment_order``, including those without data.
        """
        if name is None:
            return [(n, self.attachment_data.get(n)) for n in self.attachment_order]
        return self.attachment_data.get(name)

    def get_attachment(self, name: str) -> tuple[dict[str, Any], bytes | None] | None:
        """Return ``(info, data)`` for ``name`` or None. The data may be None."""
        info = self.get_attachment_info(name)
        if info is None:
            return None
        return info, self.attachment_data.get(name)

    def put_attachment_info(self, name: str, info: dict[str, Any]):
        """Insert or replace the metadata of ``name``. Payloads are not touched."""
        return self._with_attachment_info(name, info)

    def put_attachment_data(self, name: str, data: bytes):
        """Store the payload of an existing attachment.

        Raises:
            MissingAttachmentError: If ``name`` has no metadata
        """
        if name not in self._attachment_map():
            raise MissingAttachmentError(name)
        return self.model_copy(update={"attachment_data": {**self.attachment_data, name: data}})

    def put_attachment(
        self,
        name: str,
        data: bytes | tuple[dict[str, Any], bytes],
        content_type: str | None = None,
        digest: str | None = None,
    ):
        """Insert or replace an attachment together with its payload.

        ``data`` is either the raw payload, for which stub metadata is built
        from ``content_type`` and ``digest``, or an ``(info, payload)`` pair
        whose info is stored as given.
        """
        if isinstance(data, tuple):
            info, data = data
        else:
            info = build_attachment_info(
                data, content_type or settings.DEFAULT_CONTENT_TYPE, digest
            )
        logger.debug(f"Putting attachment '{name}' ({len(data)} bytes)")
        return self._with_attachment_info(
            name, info, attachment_data={**self.attachment_data, name: data}
        )

    def delete_attachment(self, name: str):
        """Remove ``name`` entirely. Unknown names leave the document unchanged."""
        atts = self._attachment_map()
        if name not in atts:
            return self
        fields = {**self.fields, ATTACHMENTS: {k: v for k, v in atts.items() if k != name}}
        return self.model_copy(update={
            "fields": fields,
            "attachment_order": [n for n in self.attachment_order if n != name],
            "attachment_data": {k: v for k, v in self.attachment_data.items() if k != name},
        })

    def delete_attachment_data(self, name: str | None = None):
        """Drop the payload of ``name`` (or every payload), keeping the stubs."""
        if name is None:
            return self.model_copy(update={"attachment_data": {}})
        if name not in self.attachment_data:
            return self
        data = {k: v for k, v in self.attachment_data.items() if k != name}
        return self.model_copy(update={"attachment_data": data})

    def delete_attachments(self):
        """Remove all attachments, their order and their payloads."""
        fields = {k: v for k, v in self.fields.items() if k != ATTACHMENTS}
        return self.model_copy(update={
            "fields": fields,
            "attachment_order": [],
            "attachment_data": {},
        })

"""Document entity representing a CouchDB-style document."""

from typing import Any, Callable

from pydantic import BaseModel, Field, model_validator

from ..errors import UnsupportedOperationError
from .attachments import ATTACHMENTS, AttachmentMixin

ID = "_id"
REV = "_rev"


class _Pop:
    def __repr__(self) -> str:
        return "POP"


# Returned from a get_and_update() callback to remove the key
POP = _Pop()


class Document(AttachmentMixin, BaseModel):
    """
    A document with JSON fields and binary attachments.

    Fields are read with ``doc["name"]`` or ``doc.get("name")``. The document
    is immutable: ``put``, ``delete``, ``pop`` and the attachment methods all
    return a new document.

    Attachments should not be edited through the fields. Multipart
    transmission requires the attachments to appear in the same order in the
    JSON as in the multipart body, and the attachment methods keep track of
    that order.

    Attributes:
        id: Mirrors the "_id" field
        rev: Mirrors the "_rev" field
        fields: All document fields, including "_id", "_rev" and "_attachments"
        attachment_order: Attachment names in serialization order
        attachment_data: Locally held attachment payloads by name
    """

    id: str | None = None
    rev: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)
    attachment_order: list[str] = Field(default_factory=list)
    attachment_data: dict[str, bytes] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
    }

    @model_validator(mode="before")
    @classmethod
    def sync_identity(cls, data: Any) -> Any:
        """Explicit id/rev are written into the fields, otherwise read from them."""
        if not isinstance(data, dict) or not isinstance(data.get("fields", {}), dict):
            return data
        data = dict(data)
        fields = dict(data.get("fields") or {})
        for attr, key in (("id", ID), ("rev", REV)):
            if data.get(attr) is not None:
                fields[key] = data[attr]
            else:
                data[attr] = fields.get(key)
        data["fields"] = fields
        return data

    @classmethod
    def new(cls, id: str | None = None, rev: str | None = None) -> "Document":
        """Create a document, optionally with an ID and revision."""
        return cls(id=id, rev=rev)

    @classmethod
    def from_fields(cls, fields: dict[str, Any]) -> "Document":
        """Create a document from a parsed JSON object, extracting attachment data."""
        from ..codec.json_codec import from_wire

        return from_wire(fields)

    def to_wire(self, **options: Any) -> str:
        """Serialize to JSON text. See ``couchdoc.codec.to_wire``."""
        from ..codec.json_codec import to_wire

        return to_wire(self, **options)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def set_id(self, id: str | None) -> "Document":
        """Set the document ID. None removes it from the document."""
        fields = {k: v for k, v in self.fields.items() if k != ID}
        if id is not None:
            fields = {**self.fields, ID: id}
        return self.model_copy(update={"id": id, "fields": fields})

    def set_rev(self, rev: str | None) -> "Document":
        """Set the revision. None removes it from the document."""
        fields = {k: v for k, v in self.fields.items() if k != REV}
        if rev is not None:
            fields = {**self.fields, REV: rev}
        return self.model_copy(update={"rev": rev, "fields": fields})

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def fetch(self, key: str) -> Any:
        """Return the value of ``key``.

        Raises:
            KeyError: If the document has no such field
        """
        if key == ID:
            if self.id is None:
                raise KeyError(key)
            return self.id
        if key == REV:
            if self.rev is None:
                raise KeyError(key)
            return self.rev
        return self.fields[key]

    __getitem__ = fetch

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self.fetch(key)
        except KeyError:
            return default

    def get_and_update(self, key: str, fun: Callable[[Any], Any]) -> tuple[Any, "Document"]:
        """Get the value of ``key`` and update it in one pass.

        ``fun`` receives the current value (None when missing) and returns
        either ``(get_value, new_value)`` or ``POP`` to remove the key.

        Returns:
            The get value (or the removed value) and the new document

        Raises:
            TypeError: If ``fun`` returns anything else
        """
        current = self.get(key)
        result = fun(current)
        if result is POP:
            return current, self.delete(key)
        if isinstance(result, tuple) and len(result) == 2:
            value, update = result
            return value, self.put(key, update)
        raise TypeError(
            f"the given function must return a two-element tuple or POP, got: {result!r}"
        )

    def pop(self, key: str, default: Any = None) -> tuple[Any, "Document"]:
        """Remove ``key`` and return ``(value, new_document)``.

        Returns ``(default, self)`` if the key is not present.
        """
        if key == ID:
            return (self.id if self.id is not None else default), self.set_id(None)
        if key == REV:
            return (self.rev if self.rev is not None else default), self.set_rev(None)
        if key == ATTACHMENTS:
            return self.fields.get(ATTACHMENTS, default), self.delete_attachments()
        if key not in self.fields:
            return default, self
        value = self.fields[key]
        return value, self.model_copy(
            update={"fields": {k: v for k, v in self.fields.items() if k != key}}
        )

    def put(self, key: str, value: Any) -> "Document":
        """Set field ``key`` to ``value``.

        Raises:
            UnsupportedOperationError: For "_attachments"; use the attachment
                methods instead
        """
        if key == ID:
            return self.set_id(value)
        if key == REV:
            return self.set_rev(value)
        if key == ATTACHMENTS:
            raise UnsupportedOperationError(
                "Attachments cannot be changed through put(), use the attachment methods",
                key=key,
            )
        return self.model_copy(update={"fields": {**self.fields, key: value}})

    def delete(self, key: str) -> "Document":
        """Remove field ``key``. Returns the document unchanged if it is missing."""
        if key == ID:
            return self.set_id(None)
        if key == REV:
            return self.set_rev(None)
        if key == ATTACHMENTS:
            return self.delete_attachments()
        if key not in self.fields:
            return self
        return self.model_copy(
            update={"fields": {k: v for k, v in self.fields.items() if k != key}}
        )

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        # Field names, like a mapping; items() yields the pairs
        return iter(self.fields)

    def __contains__(self, key: object) -> bool:
        if key == ID:
            return self.id is not None
        if key == REV:
            return self.rev is not None
        return key in self.fields

    def keys(self):
        return self.fields.keys()

    def items(self):
        return self.fields.items()

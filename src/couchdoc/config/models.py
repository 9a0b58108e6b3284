"""Configuration models for document serialization.

Encode behaviour is configured per call through an EncodeOptions instance
or keyword overrides passed to to_wire().
"""

from pydantic import BaseModel, Field

from .settings import settings


class EncodeOptions(BaseModel):
    """Options for serializing a Document.

    Attributes:
        pretty: Indent the output. Only whitespace changes, never order.
        multipart: Mark attachments holding data with "follows" instead of
            inlining them as base64.
        indent: Spaces per nesting level when pretty is set
    """

    pretty: bool = False
    multipart: bool = False
    indent: int = Field(default_factory=lambda: settings.JSON_INDENT, ge=0)

    model_config = {
        "frozen": True,
    }

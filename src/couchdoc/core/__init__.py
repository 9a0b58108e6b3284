from .attachments import AttachmentMixin, build_attachment_info
from .document import POP, Document

__all__ = ["AttachmentMixin", "Document", "POP", "build_attachment_info"]

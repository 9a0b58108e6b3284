"""Wire encoding and decoding of documents."""

from .json_codec import check_consistency, from_wire, to_wire, to_wire_value
from .multipart import MultipartBody, encode_multipart, multipart_parts

__all__ = [
    "from_wire",
    "to_wire",
    "to_wire_value",
    "check_consistency",
    "MultipartBody",
    "encode_multipart",
    "multipart_parts",
]

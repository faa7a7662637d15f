"""
b64img: convert images to and from base64 text.

Usage:
    from b64img import FilenameSequence, PayloadSaver, process_document

    saver = PayloadSaver("decoded", FilenameSequence())
    result = process_document(b'{"mime_type": "image/png", "data": "..."}', saver)
    print(result.text)
"""

__version__ = "0.1.0"

from .errors import (
    B64ImgError,
    FilesystemError,
    FormatError,
    MalformedBase64Error,
    NetworkError,
    UnrecognizedContentError,
)
from .extract import DocumentResult, PayloadSaver, process_document
from .naming import FilenameSequence
from .sniff import ImageFormat, detect_image_type
from .transcode import decode_base64_file, encode_image_file

__all__ = [
    "__version__",
    "B64ImgError",
    "FilesystemError",
    "FormatError",
    "MalformedBase64Error",
    "NetworkError",
    "UnrecognizedContentError",
    "DocumentResult",
    "PayloadSaver",
    "process_document",
    "FilenameSequence",
    "ImageFormat",
    "detect_image_type",
    "decode_base64_file",
    "encode_image_file",
]

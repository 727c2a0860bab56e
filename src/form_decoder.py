"""Multipart form-data decoder.

The whole body is held in memory, so boundaries are located with a plain
substring search over the buffer. Parts without a header/body separator are
skipped unless ``strict`` decoding is requested.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from errors import MalformedPart, MalformedRequest
from models import DEFAULT_CONTENT_TYPE, FileAttachment, Submission
from utils.names import sanitize_filename

logger = logging.getLogger(__name__)

CRLF = b"\r\n"
HEADER_SEPARATOR = b"\r\n\r\n"
MULTIPART_FORM_DATA = "multipart/form-data"


def parse_boundary(content_type: Optional[str]) -> str:
    """Extract the boundary token from a ``Content-Type`` header value."""
    if not content_type or MULTIPART_FORM_DATA not in content_type.lower():
        raise MalformedRequest("Content-Type must be multipart/form-data")
    for param in content_type.split(";"):
        param = param.strip()
        if param.lower().startswith("boundary="):
            boundary = param[len("boundary="):].strip()
            if len(boundary) >= 2 and boundary[0] == boundary[-1] == '"':
                boundary = boundary[1:-1]
            if boundary:
                return boundary
    raise MalformedRequest("Boundary not found")


def find_all(data: bytes, needle: bytes) -> List[int]:
    """Return every offset at which *needle* occurs in *data*."""
    offsets: List[int] = []
    if not needle:
        return offsets
    pos = data.find(needle)
    while pos != -1:
        offsets.append(pos)
        pos = data.find(needle, pos + 1)
    return offsets


def header_value(header_text: str, key: str) -> Optional[str]:
    """Return the value of header *key* (case-insensitive) or ``None``."""
    prefix = key.lower() + ":"
    for line in header_text.split("\r\n"):
        if line.lower().startswith(prefix):
            return line[len(prefix):].strip()
    return None


def disposition_param(disposition: Optional[str], param: str) -> Optional[str]:
    """Return parameter *param* of a ``Content-Disposition`` value, unquoted."""
    if disposition is None:
        return None
    prefix = param + "="
    for item in disposition.split(";"):
        item = item.strip()
        if item.startswith(prefix):
            value = item[len(prefix):].strip()
            if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            return value
    return None


def split_part(raw: bytes) -> Tuple[str, bytes]:
    """Split a raw part into its decoded header block and body bytes."""
    header_end = raw.find(HEADER_SEPARATOR)
    if header_end < 0:
        raise MalformedPart("Part has no header/body separator")
    headers = raw[:header_end].decode("latin-1")
    return headers, raw[header_end + len(HEADER_SEPARATOR):]


def iter_raw_parts(body: bytes, boundary: str):
    """Yield the byte ranges enclosed by consecutive boundary delimiters."""
    delimiter = ("--" + boundary).encode("latin-1")
    offsets = find_all(body, delimiter)
    if len(offsets) < 2:
        raise MalformedRequest("No multipart parts found")

    for current, following in zip(offsets, offsets[1:]):
        start = current + len(delimiter)
        if body[start:start + 2] == CRLF:
            start += 2
        end = following - 2
        if end <= start:
            continue
        yield body[start:end]


def decode(body: bytes, boundary: str, *, strict: bool = False) -> Submission:
    """Decode a multipart body into text fields and file attachments.

    Later fields with the same name replace earlier ones. Parts that carry
    neither ``name`` nor ``filename`` are dropped. :class:`MalformedRequest`
    is raised when the boundary occurs fewer than twice or nothing decodable
    remains.
    """
    fields: Dict[str, str] = {}
    files: List[FileAttachment] = []

    for index, raw in enumerate(iter_raw_parts(body, boundary)):
        try:
            header_text, content = split_part(raw)
        except MalformedPart:
            if strict:
                raise
            logger.debug("Skipping malformed part #%d (%d bytes)", index, len(raw))
            continue

        disposition = header_value(header_text, "Content-Disposition")
        name = disposition_param(disposition, "name")
        filename = disposition_param(disposition, "filename")

        if filename:
            files.append(
                FileAttachment(
                    field=name or "",
                    filename=sanitize_filename(filename),
                    content_type=header_value(header_text, "Content-Type")
                    or DEFAULT_CONTENT_TYPE,
                    content=content,
                )
            )
        elif name is not None:
            fields[name] = content.decode("utf-8", errors="replace").strip()
        else:
            logger.debug("Dropping part #%d without name or filename", index)

    submission = Submission(fields=fields, files=files)
    if submission.is_empty:
        raise MalformedRequest("No multipart parts found")
    logger.debug(
        "Decoded %d field(s) and %d file(s)", len(submission.fields), len(submission.files)
    )
    return submission


__all__ = [
    "parse_boundary",
    "find_all",
    "header_value",
    "disposition_param",
    "split_part",
    "iter_raw_parts",
    "decode",
]

"""
PEM block decoding.

Transport profiles carry certificates and keys as PEM text that may hold any
number of concatenated blocks of mixed types. iter_pem_blocks() walks the text
the way a PEM decoder loop does: find the next block, yield it, continue with
the rest until no BEGIN marker is left.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator

logger = logging.getLogger(__name__)

_BEGIN_RE = re.compile(r'-----BEGIN ([^\r\n]*?)-----[ \t]*\r?\n')
_HEADER_RE = re.compile(r'^([\x21-\x39\x3b-\x7e]+):\s*(.*)$')


@dataclass(frozen=True)
class PemBlock:
    """Decoded PEM block: type label, optional RFC 1421 headers and DER bytes."""
    type: str
    data: bytes
    headers: Dict[str, str] = field(default_factory=dict)


def _split_headers(body: str) -> tuple[Dict[str, str], str]:
    lines = body.splitlines()
    headers: Dict[str, str] = {}
    if not lines or not _HEADER_RE.match(lines[0]):
        return headers, body

    i = 0
    while i < len(lines):
        match = _HEADER_RE.match(lines[i])
        if not match:
            break
        headers[match.group(1)] = match.group(2).strip()
        i += 1
    # Headers are terminated by an empty line
    if i < len(lines) and not lines[i].strip():
        i += 1
    return headers, "\n".join(lines[i:])


def iter_pem_blocks(text: str) -> Iterator[PemBlock]:
    """
    Yield every well-formed PEM block in `text`, in order.

    Data outside blocks is ignored. A block without a matching END line or
    with a body that is not valid base64 is skipped and scanning resumes
    right after its BEGIN line.

    Args:
        text: PEM text, possibly empty

    Yields:
        PemBlock for each decodable block
    """
    if not text:
        return

    pos = 0
    while True:
        begin = _BEGIN_RE.search(text, pos)
        if begin is None:
            return

        block_type = begin.group(1)
        end_marker = f"-----END {block_type}-----"
        end = text.find(end_marker, begin.end())
        if end < 0:
            logger.debug(f"PEM block '{block_type}' has no END line, skipping")
            pos = begin.end()
            continue

        headers, body = _split_headers(text[begin.end():end])
        try:
            data = base64.b64decode("".join(body.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            logger.debug(f"PEM block '{block_type}' has invalid base64 body: {e}")
            pos = begin.end()
            continue

        yield PemBlock(type=block_type, data=data, headers=headers)
        pos = end + len(end_marker)

"""Text decoding for statement files."""

import logging

logger = logging.getLogger(__name__)

REPLACEMENT_CHARACTER = "\ufffd"
FALLBACK_ENCODING = "cp1252"


def decode_buffer(data: bytes) -> str:
    """Decode a statement file, preferring UTF-8.

    Brazilian bank exports are frequently Windows-1252. When UTF-8 decoding
    produces replacement characters the buffer is decoded again as cp1252.
    Decoding never fails; undecodable bytes become replacement characters.
    """
    text = data.decode("utf-8-sig", errors="replace")
    if REPLACEMENT_CHARACTER not in text:
        return text

    logger.debug("Buffer is not valid UTF-8, decoding as %s", FALLBACK_ENCODING)
    return data.decode(FALLBACK_ENCODING, errors="replace")

"""Raw DEFLATE compression and URL-safe base64 transcoding."""

import base64
import binascii
import zlib

from .errors import DecodeError

COMPRESSION_LEVEL = 9

# Negative window bits select a raw DEFLATE stream without zlib header
RAW_DEFLATE_WBITS = -15


def compress(data: bytes) -> bytes:
    """Compress bytes with raw DEFLATE at maximum level."""
    compressor = zlib.compressobj(COMPRESSION_LEVEL, zlib.DEFLATED, RAW_DEFLATE_WBITS)
    return compressor.compress(data) + compressor.flush()


def decompress(data: bytes) -> bytes:
    """
    Inflate a raw DEFLATE stream.

    Raises:
        DecodeError: If the stream is corrupted or truncated
    """
    try:
        return zlib.decompress(data, RAW_DEFLATE_WBITS)
    except zlib.error as e:
        raise DecodeError(f"Corrupted compressed payload: {e}") from e


def to_base64url(data: bytes) -> str:
    """Encode bytes as unpadded base64url (``-`` and ``_`` alphabet)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def from_base64url(text: str) -> bytes:
    """
    Decode unpadded base64url text.

    Raises:
        DecodeError: If the text contains characters outside the alphabet or
            has an impossible length
    """
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64url text: {e}") from e

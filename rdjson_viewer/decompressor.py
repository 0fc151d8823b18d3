import binascii
import zlib
from base64 import b64decode

from . import DecodeError


def inflate(data: bytes) -> bytes:
    """Decompress a complete zlib stream.

    Raises
    ------
    DecodeError
        Stream is corrupt, truncated, or followed by trailing garbage.
    """
    d = zlib.decompressobj()
    try:
        out = d.decompress(data)
        out += d.flush()
    except zlib.error as e:
        raise DecodeError(f"invalid zlib stream: {e}") from e
    if not d.eof:
        raise DecodeError("truncated zlib stream")
    if d.unused_data:
        raise DecodeError("trailing data after zlib stream")
    return out


def decompress(payload: str) -> bytes:
    """Single-call to decode a viewer payload.

    Parameters
    ----------
    payload: str
        Standard, padded base64 encoding of a zlib stream.

    Returns
    -------
    bytes
        Original report.
    """
    try:
        data = b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"invalid base64 payload: {e}") from e
    return inflate(data)

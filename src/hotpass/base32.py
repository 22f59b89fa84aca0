import base64
import logging

from .exceptions import MalformedSecret

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PAD = "="

_VALUES = {c: i for i, c in enumerate(ALPHABET)}


def decode(text: str, strict: bool = False) -> bytes:
    """
    Decodes base32 secret text into raw key bytes.

    Input is case-insensitive and padding is optional. In the default
    lenient mode any character outside the alphabet (padding included)
    counts as the value 0 instead of raising; with ``strict=True`` such
    characters raise :class:`MalformedSecret`, except for trailing ``=``
    padding. Trailing NUL bytes are stripped from the result in both modes.

    :param text: base32 text, e.g. "JBSWY3DPEHPK3PXP"
    :param strict: reject characters outside the alphabet
    :returns: key bytes
    """
    text = text.upper()
    if strict:
        _check_strict(text)

    bits = 0
    nbits = 0
    unknown = 0
    out = bytearray()
    for c in text:
        v = _VALUES.get(c)
        if v is None:
            if c != PAD:
                unknown += 1
            v = 0
        # 5 bits in, MSB first; emit a byte once 8 are buffered
        bits = (bits << 5) | v
        nbits += 5
        if nbits >= 8:
            nbits -= 8
            out.append((bits >> nbits) & 0xFF)
            bits &= (1 << nbits) - 1
    # leftover bits (< 8) are dropped

    if unknown and not strict:
        logger.warning("base32 secret had %d unrecognised character(s), decoded as zero", unknown)

    return bytes(out.rstrip(b"\0"))


def _check_strict(text: str) -> None:
    body = text.rstrip(PAD)
    for pos, c in enumerate(body):
        if c not in _VALUES:
            raise MalformedSecret("invalid base32 character at position {}".format(pos))


def encode(data: bytes) -> str:
    """
    Encodes raw bytes as unpadded base32 text.
    """
    return base64.b32encode(data).decode("ascii").rstrip(PAD)

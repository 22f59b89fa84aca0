import hashlib
import hmac
from typing import Any, Optional

from . import base32
from .exceptions import InvalidDigits


DEFAULT_DIGITS = 6
MAX_DIGITS = 10


def check_digits(digits: Any) -> int:
    # bool is an int subclass, keep it out
    if isinstance(digits, bool) or not isinstance(digits, int) or not 1 <= digits <= MAX_DIGITS:
        raise InvalidDigits("digits must be an integer between 1 and {}, got {!r}".format(MAX_DIGITS, digits))
    return digits


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        strict: bool = False,
    ) -> None:
        """
        :param s: secret in base32 format
        :param digits: number of integers in the OTP, 1 to 10
        :param name: account name
        :param issuer: issuer
        :param strict: reject secrets with characters outside the base32 alphabet
            instead of decoding them as zero
        """
        self.digits = check_digits(digits)
        self.secret = s
        self.name = name or "Secret"
        self.issuer = issuer
        self.strict = strict

    def generate_otp(self, input: int, key: Optional[bytes] = None) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        :param key: already decoded secret, defaults to byte_secret()
        """
        # RFC 4226 section 5.3
        if input < 0:
            raise ValueError("input must be positive integer")
        if key is None:
            key = self.byte_secret()
        digest = hmac.new(key, self.int_to_bytestring(input), hashlib.sha1).digest()
        return self.truncate(digest, self.digits)

    def byte_secret(self) -> bytes:
        return base32.decode(self.secret, strict=self.strict)

    @staticmethod
    def int_to_bytestring(i: int, padding: int = 8) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret.

        Always ``padding`` bytes, big-endian; higher-order bytes of ``i``
        that do not fit are discarded.
        """
        result = bytearray(padding)
        for pos in range(padding - 1, -1, -1):
            result[pos] = i & 0xFF
            i >>= 8
        return bytes(result)

    @staticmethod
    def truncate(digest: bytes, digits: int = DEFAULT_DIGITS) -> str:
        """
        Dynamic truncation of an HMAC digest into a decimal code.

        The low nibble of the last byte picks a 4 byte window, the top bit
        of that window is cleared and the 31-bit result is reduced modulo
        10**digits.

        :param digest: raw HMAC output, at least 20 bytes for SHA1
        :param digits: code length
        :returns: zero-padded code, exactly ``digits`` characters
        """
        check_digits(digits)
        hmac_hash = bytearray(digest)
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        # 11 digit prefix keeps leading zeros, slice keeps the last `digits`
        str_code = str(10_000_000_000 + (code % 10**digits))
        return str_code[-digits:]

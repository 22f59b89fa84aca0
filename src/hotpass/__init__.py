from typing import Any, Callable, Optional, Sequence, Union

from . import base32
from .compat import random
from .exceptions import HotpassError as HotpassError
from .exceptions import InvalidDigits as InvalidDigits
from .exceptions import InvalidWindow as InvalidWindow
from .exceptions import MalformedSecret as MalformedSecret
from .hotp import HOTP as HOTP
from .otp import DEFAULT_DIGITS
from .otp import OTP as OTP
from .totp import TOTP as TOTP
from .utils import build_qr_url

DEFAULT_SECRET_LENGTH = 16


def random_base32(
    length: int = DEFAULT_SECRET_LENGTH,
    chars: Sequence[str] = base32.ALPHABET,
    rng: Any = None,
) -> str:
    """
    Returns a random base32 secret of ``length`` characters.

    Each character is drawn independently from ``chars``. The default
    source is ``random.SystemRandom``; pass ``rng`` (anything with a
    ``choice`` method) to substitute another one.
    """
    # 16 chars is 80 bits, which is what most authenticator apps expect.
    # The otpauth scheme does not use base32 padding for lengths not divisible by 8.
    if length <= 0:
        raise ValueError("length must be a positive integer")
    rng = rng or random
    return "".join(rng.choice(chars) for _ in range(length))


random_secret = random_base32


def generate(
    secret: str,
    window_seconds: int,
    timestamp: Optional[Union[int, float]] = None,
    digits: int = DEFAULT_DIGITS,
    clock: Optional[Callable[[], float]] = None,
    strict: bool = False,
) -> str:
    """
    Returns the TOTP code for ``secret`` at ``timestamp``.

    :param secret: base32 secret
    :param window_seconds: time step, must be a positive integer
    :param timestamp: Unix time in seconds; None means now, 0 means the epoch
    :param digits: code length
    :param clock: current time source used when ``timestamp`` is None
    :param strict: raise MalformedSecret instead of decoding unknown characters as zero
    :returns: code
    """
    totp = TOTP(secret, digits=digits, interval=window_seconds, clock=clock, strict=strict)
    if timestamp is None:
        return totp.now()
    return totp.at(timestamp)


def hotp(secret: str, counter: int, digits: int = DEFAULT_DIGITS, strict: bool = False) -> str:
    """
    Returns the HOTP code for ``secret`` at event ``counter``.
    """
    return HOTP(secret, digits=digits, strict=strict).at(counter)


def build_provisioning_url(account: str, issuer_or_host: str, secret: str) -> str:
    """
    Returns a QR chart URL carrying ``otpauth://totp/{issuer}:{account}?secret=...``.
    """
    return build_qr_url(account, issuer_or_host, secret)


class HotpassError(ValueError):
    """
    Base class for errors raised by hotpass.
    """


class InvalidWindow(HotpassError):
    """
    Raised when a time step (window) is not a positive integer.
    """


class InvalidDigits(HotpassError):
    """
    Raised when the requested code length is outside 1..10.
    """


class MalformedSecret(HotpassError):
    """
    Raised by the strict base32 decoder for characters outside the alphabet.
    Lenient decoding never raises this.
    """

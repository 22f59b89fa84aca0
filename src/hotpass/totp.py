import calendar
import datetime
import logging
import time
from typing import Any, Callable, Optional, Union

from . import utils
from .exceptions import InvalidWindow
from .otp import DEFAULT_DIGITS, OTP

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30


def check_interval(interval: Any) -> int:
    # bool is an int subclass, keep it out
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise InvalidWindow("interval must be a positive integer, got {!r}".format(interval))
    return interval


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        interval: int = DEFAULT_INTERVAL,
        strict: bool = False,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param name: account name
        :param issuer: issuer
        :param strict: reject malformed base32 secrets
        :param clock: callable returning the current Unix time, defaults to time.time
        """
        self.interval = check_interval(interval)
        self.clock = clock or time.time
        super().__init__(s=s, digits=digits, name=name, issuer=issuer, strict=strict)

    def at(self, for_time: Union[int, float, datetime.datetime], counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        Timestamp 0 is a real time, not "now".

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + int(counter_offset))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(self.clock())

    def verify(
        self,
        otp: str,
        for_time: Optional[Union[int, float, datetime.datetime]] = None,
        valid_window: int = 0,
    ) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = self.clock()

        key = self.byte_secret()
        counter = self.timecode(for_time)
        if valid_window:
            for i in range(-valid_window, valid_window + 1):
                # no steps before the epoch
                if counter + i < 0:
                    continue
                if utils.strings_equal(str(otp), str(self.generate_otp(counter + i, key))):
                    return True
            logger.debug("TOTP mismatch within +/-%d steps", valid_window)
            return False

        ok = utils.strings_equal(str(otp), str(self.generate_otp(counter, key)))
        if not ok:
            logger.debug("TOTP mismatch")
        return ok

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        """
        return utils.build_uri(
            self.secret,
            name if name else self.name,
            issuer=issuer_name if issuer_name else self.issuer,
            digits=self.digits,
            period=self.interval,
        )

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Accepts either a timezone naive (`for_time.tzinfo is None`) or
        a timezone aware datetime as argument and returns the
        corresponding counter value (timecode).

        """
        if isinstance(for_time, datetime.datetime):
            if for_time.tzinfo:
                for_time = calendar.timegm(for_time.utctimetuple())
            else:
                for_time = time.mktime(for_time.timetuple())
        return int(for_time // self.interval)

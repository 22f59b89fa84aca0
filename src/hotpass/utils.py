import re
import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode

QR_CHART_URL = "http://chart.apis.google.com/chart?cht=qr&chs=150x150&chl={chl}&chld=H|0"

_WHITESPACE = re.compile(r"\s+")


def build_uri(
    secret: str,
    name: str,
    initial_count: Optional[int] = None,
    issuer: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the provisioning URI for the OTP; works for either TOTP or HOTP.

    This can then be encoded in a QR Code and used to provision an
    authenticator app.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the hotp/totp secret used to generate the URI
    :param name: name of the account
    :param initial_count: starting counter value, defaults to None.
        If none, the OTP type will be assumed as TOTP.
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param digits: the length of the OTP generated code.
    :param period: the number of seconds the OTP generator is set to
        expire every code.
    :returns: provisioning uri
    """
    # initial_count may be 0 as a valid param
    is_initial_count_present = initial_count is not None

    # only non-default values go into the URI
    is_digits_set = digits is not None and digits != 6
    is_period_set = period is not None and period != 30

    otp_type = "hotp" if is_initial_count_present else "totp"
    base_uri = "otpauth://{0}/{1}?{2}"

    url_args: Dict[str, Union[None, int, str]] = {"secret": secret}

    label = quote(name)
    if issuer is not None:
        label = quote(issuer) + ":" + label
        url_args["issuer"] = issuer

    if is_initial_count_present:
        url_args["counter"] = initial_count
    if is_digits_set:
        url_args["digits"] = digits
    if is_period_set:
        url_args["period"] = period

    return base_uri.format(otp_type, label, urlencode(url_args).replace("+", "%20"))


def build_qr_url(account: str, issuer_or_host: str, secret: str, chart_url: str = QR_CHART_URL) -> str:
    """
    Returns the URL of a QR code image for enrolling ``secret``.

    The ``otpauth://totp/{issuer}:{account}?secret={secret}`` string is
    placed verbatim (no percent-encoding) into the ``chl`` slot of
    ``chart_url``. No request is made; rendering the image is up to
    whoever resolves the URL.

    :param account: user name
    :param issuer_or_host: issuer name or site host
    :param secret: base32 secret; whitespace is removed and it is upper-cased
    :param chart_url: chart endpoint template with a ``{chl}`` field
    :returns: chart URL
    """
    secret = _WHITESPACE.sub("", secret.upper())
    chl = "otpauth://totp/{}:{}?secret={}".format(issuer_or_host, account, secret)
    return chart_url.format(chl=chl)


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))

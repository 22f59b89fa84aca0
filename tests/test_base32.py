"""Tests for the base32 secret codec."""

from __future__ import annotations

import logging

import pytest

from hotpass import base32
from hotpass.exceptions import MalformedSecret


def test_decode_known_secret():
    assert base32.decode("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"


def test_decode_is_case_insensitive():
    assert base32.decode("jbswy3dpehpk3pxp") == base32.decode("JBSWY3DPEHPK3PXP")


def test_decode_rfc_secret_length():
    # 32 chars * 5 bits = 160 bits = 20 bytes
    key = base32.decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
    assert len(key) == 20
    assert key == b"12345678901234567890"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("MY", b"f"),
        ("MZXQ", b"fo"),
        ("MZXW6", b"foo"),
        ("MZXW6YQ", b"foob"),
        ("MZXW6YTB", b"fooba"),
        ("MZXW6YTBOI", b"foobar"),
    ],
)
def test_decode_drops_partial_trailing_bits(text, expected):
    assert base32.decode(text) == expected


def test_decode_accepts_padding():
    assert base32.decode("MZXW6YQ=") == b"foob"
    assert base32.decode("MFRGG===") == b"abc"


def test_decode_strips_trailing_nul_bytes():
    assert base32.decode("MFRGGAAA") == b"abc"
    assert base32.decode("AAAAAAAA") == b""


def test_decode_lenient_treats_unknown_as_zero(caplog):
    with caplog.at_level(logging.WARNING, logger="hotpass.base32"):
        assert base32.decode("MFRG1") == base32.decode("MFRGA")
    assert "1 unrecognised" in caplog.text
    assert "MFRG1" not in caplog.text


def test_decode_strict_rejects_unknown():
    with pytest.raises(MalformedSecret, match="position 4"):
        base32.decode("MFRG1", strict=True)


def test_decode_strict_accepts_valid_and_padded():
    assert base32.decode("mfrgg===", strict=True) == b"abc"


def test_strict_error_is_value_error():
    with pytest.raises(ValueError):
        base32.decode("AB=CD", strict=True)


def test_encode():
    assert base32.encode(b"Hello!\xde\xad\xbe\xef") == "JBSWY3DPEHPK3PXP"
    assert base32.encode(b"abc") == "MFRGG"
    assert base32.encode(b"") == ""

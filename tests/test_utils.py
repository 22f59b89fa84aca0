"""Tests for provisioning URLs, secret generation and URI parsing."""

from __future__ import annotations

import random

import pytest

import hotpass
from hotpass import base32, utils


def test_build_provisioning_url():
    url = hotpass.build_provisioning_url("alice", "example.com", "jbsw y3dp\tehpk 3pxp")
    assert url == (
        "http://chart.apis.google.com/chart?cht=qr&chs=150x150"
        "&chl=otpauth://totp/example.com:alice?secret=JBSWY3DPEHPK3PXP&chld=H|0"
    )


def test_build_qr_url_custom_chart():
    url = utils.build_qr_url("bob", "Acme", "mfrgg", chart_url="https://qr.example/?d={chl}")
    assert url == "https://qr.example/?d=otpauth://totp/Acme:bob?secret=MFRGG"


def test_strings_equal():
    assert utils.strings_equal("482193", "482193")
    assert utils.strings_equal("４８２１９３", "482193")
    assert not utils.strings_equal("482193", "482194")
    assert not utils.strings_equal("482193", "48219")


def test_random_secret_default_length():
    secret = hotpass.random_secret()
    assert len(secret) == 16
    assert set(secret) <= set(base32.ALPHABET)


def test_random_secret_length():
    assert len(hotpass.random_base32(32)) == 32


def test_random_secret_no_collisions():
    secrets = {hotpass.random_secret() for _ in range(200)}
    assert len(secrets) == 200


def test_random_secret_injected_rng():
    a = hotpass.random_secret(rng=random.Random(1234))
    b = hotpass.random_secret(rng=random.Random(1234))
    assert a == b


@pytest.mark.parametrize("length", [0, -1])
def test_random_secret_bad_length(length):
    with pytest.raises(ValueError):
        hotpass.random_secret(length)


def test_random_secret_decodes():
    secret = hotpass.random_secret(32)
    assert len(hotpass.generate(secret, 30, 1700000000)) == 6


def test_build_uri_totp_label():
    assert utils.build_uri("JBSWY3DPEHPK3PXP", "alice", issuer="Acme", period=60) == (
        "otpauth://totp/Acme:alice?secret=JBSWY3DPEHPK3PXP&issuer=Acme&period=60"
    )

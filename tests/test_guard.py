"""Tests for confirmation key derivation."""
import base64
import hashlib
import hmac
import re
from urllib.parse import quote, unquote

import pytest

from steam_lib.guard import generate_confirmation_key, generate_device_id
from utils.exceptions import CryptoError


IDENTITY_SECRET = base64.b64encode(b"0123456789abcdefghij").decode()


def _expected(digest_hex: str) -> str:
    return quote(base64.b64encode(bytes.fromhex(digest_hex)).decode(), safe="")


def test_rfc2202_vector_with_tag():
    """'Jefe' / 'what do ya want for nothing?' split into an 8-byte timestamp and a tag."""
    secret = base64.b64encode(b"Jefe").decode()
    timestamp = int.from_bytes(b"what do ", "big")

    key = generate_confirmation_key(secret, "ya want for nothing?", timestamp)

    assert key == _expected("effcdf6ae5eb2fa2d27416d5f184df9c259a7c79")


def test_rfc2202_vector_with_empty_tag():
    """The whole message fits into the timestamp, the tag adds nothing."""
    secret = base64.b64encode(b"\x0b" * 20).decode()
    timestamp = int.from_bytes(b"Hi There", "big")

    key = generate_confirmation_key(secret, "", timestamp)

    assert key == _expected("b617318655057264e28bc0b6fb378c8ef146be00")


def test_message_layout_is_big_endian_timestamp_then_tag():
    timestamp = 1_700_000_000
    message = timestamp.to_bytes(8, "big") + b"conf"
    digest = hmac.new(b"0123456789abcdefghij", message, hashlib.sha1).digest()

    key = generate_confirmation_key(IDENTITY_SECRET, "conf", timestamp)

    assert unquote(key) == base64.b64encode(digest).decode()


def test_key_is_deterministic():
    keys = {generate_confirmation_key(IDENTITY_SECRET, "conf", 1_700_000_000) for _ in range(5)}
    assert len(keys) == 1


def test_key_is_percent_encoded():
    key = generate_confirmation_key(IDENTITY_SECRET, "conf", 1_700_000_000)

    # 20 bytes of SHA-1 always end with one '=' of padding
    assert key.endswith("%3D")
    assert not re.search(r"[+/=]", key)
    assert len(base64.b64decode(unquote(key))) == 20


def test_tag_longer_than_32_characters_is_truncated():
    prefix = "a" * 32
    long_key = generate_confirmation_key(IDENTITY_SECRET, prefix + "b", 1_700_000_000)
    prefix_key = generate_confirmation_key(IDENTITY_SECRET, prefix, 1_700_000_000)
    shorter_key = generate_confirmation_key(IDENTITY_SECRET, prefix[:-1], 1_700_000_000)

    assert long_key == prefix_key
    assert shorter_key != prefix_key


def test_different_tags_give_different_keys():
    conf_key = generate_confirmation_key(IDENTITY_SECRET, "conf", 1_700_000_000)
    accept_key = generate_confirmation_key(IDENTITY_SECRET, "accept", 1_700_000_000)
    assert conf_key != accept_key


def test_different_timestamps_give_different_keys():
    assert generate_confirmation_key(IDENTITY_SECRET, "conf", 1) != generate_confirmation_key(IDENTITY_SECRET, "conf", 2)


@pytest.mark.parametrize("secret", ["not base64!", "abc", "YWJj$GVm"])
def test_undecodable_secret_raises_crypto_error(secret):
    with pytest.raises(CryptoError, match="Failed to decode identity secret"):
        generate_confirmation_key(secret, "conf", 1_700_000_000)


def test_device_id_format():
    device_id = generate_device_id("76561198000000000")

    assert re.fullmatch(r"android:[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", device_id)
    assert device_id == generate_device_id(76561198000000000)

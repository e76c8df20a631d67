import hashlib
import hmac

import pytest

from microguard import kdf


@pytest.mark.parametrize(
    "key, data",
    [
        (b"", b""),
        (b"k" * 32, b"message"),
        (bytes(range(64)), b"exactly one block of key"),
        (bytes(range(100)), b"long key gets hashed first"),
    ],
)
def test_hmac_matches_stdlib(key, data):
    expected = hmac.new(key, data, hashlib.blake2s).digest()
    assert kdf.hmac_blake2s(key, data) == expected


def test_kdf1_definition():
    ck = bytes(range(32))
    tau0 = hmac.new(ck, b"input", hashlib.blake2s).digest()
    expected = hmac.new(tau0, b"\x01", hashlib.blake2s).digest()
    assert kdf.kdf1(ck, b"input") == expected


def test_kdf_outputs_are_prefix_consistent():
    ck = bytes(range(32, 64))
    one = kdf.kdf1(ck, b"data")
    two = kdf.kdf2(ck, b"data")
    three = kdf.kdf3(ck, b"data")
    assert two[0] == one
    assert three[:2] == two
    assert len({*three}) == 3
    assert all(len(part) == 32 for part in three)


def test_kdf2_second_output_chains_first():
    ck = b"\x05" * 32
    tau0 = hmac.new(ck, b"", hashlib.blake2s).digest()
    first, second = kdf.kdf2(ck, b"")
    assert second == hmac.new(tau0, first + b"\x02", hashlib.blake2s).digest()


def test_mix_hash():
    current = b"\x11" * 32
    assert kdf.mix_hash(current, b"abc") == hashlib.blake2s(current + b"abc").digest()


def test_mac_is_keyed_blake2s_16():
    key = b"\x22" * 32
    expected = hashlib.blake2s(b"payload", digest_size=16, key=key).digest()
    assert kdf.mac(key, b"payload") == expected


def test_mac_key():
    public_key = b"\x33" * 32
    expected = hashlib.blake2s(b"mac1----" + public_key).digest()
    assert kdf.mac_key(kdf.LABEL_MAC1, public_key) == expected
    assert kdf.mac_key(kdf.LABEL_COOKIE, public_key) != expected


def test_construction_and_identifier_hashes():
    construction = hashlib.blake2s(b"Noise_IKpsk2_25519_ChaChaPoly_BLAKE2s").digest()
    assert kdf.construction_hash() == construction
    assert kdf.identifier_hash() == hashlib.blake2s(construction + kdf.IDENTIFIER).digest()
    assert len(kdf.IDENTIFIER) == 34
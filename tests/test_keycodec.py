import base64

import pytest

from microguard.keycodec import base64_decode, base64_encode


@pytest.mark.parametrize(
    "data", [b"", b"f", b"fo", b"foo", b"foob", b"fooba", b"foobar", bytes(range(32))]
)
def test_encode_matches_standard_base64(data):
    assert base64_encode(data) == base64.b64encode(data).decode("ascii")


@pytest.mark.parametrize("size", [0, 1, 2, 3, 31, 32, 33, 64])
def test_round_trip(size):
    data = bytes((i * 7 + 3) & 0xFF for i in range(size))
    assert base64_decode(base64_encode(data)) == data


def test_empty_text_decodes_to_nothing():
    assert base64_decode("") == b""


def test_key_fits_exact_limit():
    key = bytes(range(100, 132))
    text = base64_encode(key)
    assert len(text) == 44
    assert base64_decode(text, 32) == key


def test_too_long_for_limit():
    with pytest.raises(ValueError):
        base64_decode(base64_encode(bytes(33)), 32)


def test_data_after_padding_rejected():
    with pytest.raises(ValueError):
        base64_decode("Zg=A")


def test_padding_in_middle_rejected():
    with pytest.raises(ValueError):
        base64_decode("Zg==Zm9v")


def test_missing_padding_rejected():
    with pytest.raises(ValueError):
        base64_decode("Zg=")


def test_invalid_character_rejected():
    with pytest.raises(ValueError):
        base64_decode("Z!==")


def test_all_padding_rejected():
    with pytest.raises(ValueError):
        base64_decode("====")


def test_triple_padding_yields_one_byte():
    assert base64_decode("A===") == b"\x00"
import pytest

from microguard.chacha20 import ChaCha20, hchacha20

SUNSCREEN = (
    b"Ladies and Gentlemen of the class of '99: If I could offer you only one "
    b"tip for the future, sunscreen would be it."
)


def test_zero_key_keystream_vector():
    stream = ChaCha20(bytes(32), 0).process(bytes(64))
    assert stream[:16].hex() == "76b8e0ada0f13d90405d6ae55386bd28"


def test_rfc_sunscreen_first_bytes():
    cipher = ChaCha20(bytes(range(32)), 0x4A000000)
    cipher.process(bytes(64))  # skip block 0 so encryption starts at counter 1
    ciphertext = cipher.process(SUNSCREEN)
    assert ciphertext[:16].hex() == "6e2e359a2568f98041ba0728dd0d6981"
    assert len(ciphertext) == len(SUNSCREEN)


def test_hchacha20_vector():
    nonce = bytes.fromhex("000000090000004a0000000031415927")
    subkey = hchacha20(bytes(range(32)), nonce)
    assert subkey.hex() == (
        "82413b4227b27bfed30e42508a877d73a0f9e4d58a74a853c12ec41326d3ecdc"
    )


def test_round_trip():
    key = bytes(range(1, 33))
    ciphertext = ChaCha20(key, 7).process(SUNSCREEN)
    assert ciphertext != SUNSCREEN
    assert ChaCha20(key, 7).process(ciphertext) == SUNSCREEN


def test_whole_block_calls_continue_stream():
    key = bytes(32)
    whole = ChaCha20(key, 3).process(bytes(192))
    cipher = ChaCha20(key, 3)
    parts = cipher.process(bytes(64)) + cipher.process(bytes(128))
    assert parts == whole
    assert cipher.block_counter == 3


def test_partial_block_discards_leftover_keystream():
    key = bytes(range(32))
    full = ChaCha20(key, 0).process(bytes(128))
    cipher = ChaCha20(key, 0)
    assert cipher.process(bytes(10)) == full[:10]
    assert cipher.process(bytes(64)) == full[64:128]


def test_different_nonces_give_different_streams():
    key = bytes(range(32))
    assert ChaCha20(key, 0).process(bytes(64)) != ChaCha20(key, 1).process(bytes(64))


def test_empty_input():
    cipher = ChaCha20(bytes(32), 0)
    assert cipher.process(b"") == b""
    assert cipher.block_counter == 0


@pytest.mark.parametrize("nonce", [-1, 1 << 64])
def test_nonce_out_of_range(nonce):
    with pytest.raises(ValueError):
        ChaCha20(bytes(32), nonce)


def test_bad_key_length():
    with pytest.raises(ValueError):
        ChaCha20(bytes(31), 0)


def test_hchacha20_bad_nonce_length():
    with pytest.raises(ValueError):
        hchacha20(bytes(32), bytes(15))
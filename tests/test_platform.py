import struct
import time

import pytest

from microguard.platform import (
    TAI64N_SIZE,
    is_under_load,
    now_ms,
    random_bytes,
    tai64n,
    tai64n_now,
)


def test_tai64n_epoch_label():
    assert tai64n(0) == bytes.fromhex("400000000000000a00000000")


def test_tai64n_length():
    assert len(tai64n(1_234_567_890_123_456)) == TAI64N_SIZE


def test_tai64n_whole_second_advances_seconds_field():
    first = struct.unpack(">QI", tai64n(5_000_000))
    second = struct.unpack(">QI", tai64n(6_000_000))
    assert second[0] == first[0] + 1
    assert first[1] == second[1] == 0


def test_tai64n_sub_second_goes_to_nanoseconds():
    seconds_only = struct.unpack(">QI", tai64n(7_000_000))
    with_micros = struct.unpack(">QI", tai64n(7_000_001))
    assert with_micros[0] == seconds_only[0]
    assert with_micros[1] == 1000


def test_tai64n_byte_order_follows_time_order():
    times = [0, 1, 999_999, 1_000_000, 1_700_000_000_000_000, 1_700_000_000_000_001]
    labels = [tai64n(t) for t in times]
    assert labels == sorted(labels)
    assert len(set(labels)) == len(labels)


def test_tai64n_rejects_negative():
    with pytest.raises(ValueError):
        tai64n(-1)


def test_tai64n_now_between_bounds():
    before = tai64n(time.time_ns() // 1000)
    current = tai64n_now()
    after = tai64n(time.time_ns() // 1000)
    assert before <= current <= after


def test_now_ms_fits_32_bits_and_moves_forward():
    first = now_ms()
    time.sleep(0.01)
    second = now_ms()
    assert 0 <= first <= 0xFFFFFFFF
    assert ((second - first) & 0xFFFFFFFF) >= 5


def test_random_bytes_length_and_variety():
    samples = {random_bytes(32) for _ in range(8)}
    assert len(samples) == 8
    assert all(len(s) == 32 for s in samples)
    assert random_bytes(0) == b""


def test_random_bytes_rejects_negative():
    with pytest.raises(ValueError):
        random_bytes(-1)


def test_not_under_load():
    assert is_under_load() is False
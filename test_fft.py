#!/usr/bin/env python3
"""
Tests for the FFT/DFT transforms and the bit-reversal permutation.
"""

import numpy as np
import pytest

from winfir import fft
from winfir.errors import (
    AllocationFailureError,
    InvalidLengthError,
    LengthExceedsTableError,
)
from winfir.fft import bit_reverse, cosine_table, fast_transform, general_transform

POW2_LENGTHS = [1 << k for k in range(1, 13)]  # 2 .. 4096


@pytest.fixture
def rng():
    return np.random.default_rng(0)


def random_complex(rng, length):
    return rng.standard_normal(length) + 1j * rng.standard_normal(length)


@pytest.mark.parametrize("length", POW2_LENGTHS)
def test_bit_reverse_is_an_involution(rng, length):
    x = random_complex(rng, length)
    original = x.copy()

    bit_reverse(x)
    bit_reverse(x)

    assert np.array_equal(x, original)


def test_bit_reverse_order():
    x = np.arange(8, dtype=np.complex128)
    bit_reverse(x)
    assert x.real.tolist() == [0, 4, 2, 6, 1, 5, 3, 7]


def test_bit_reverse_rejects_non_power_of_two():
    with pytest.raises(InvalidLengthError):
        bit_reverse(np.zeros(6, dtype=np.complex128))


@pytest.mark.parametrize("length", [2, 4, 16, 256, 4096])
def test_forward_inverse_round_trip(rng, length):
    x = random_complex(rng, length)

    spectrum = fast_transform(x)
    restored = fast_transform(spectrum, inverse=True)

    np.testing.assert_allclose(restored, x, rtol=1e-9, atol=1e-12)


@pytest.mark.parametrize("length", [2, 4, 8, 64, 256])
def test_fast_and_general_agree(rng, length):
    x = random_complex(rng, length)

    np.testing.assert_allclose(fast_transform(x), general_transform(x), atol=1e-9)
    np.testing.assert_allclose(fast_transform(x, inverse=True),
                               general_transform(x, inverse=True), atol=1e-9)


def test_constant_signal_is_dc_only():
    out = fast_transform(np.ones(4, dtype=np.complex128))
    np.testing.assert_allclose(out, [1, 0, 0, 0], atol=1e-12)


def test_forward_normalizes_inverse_does_not(rng):
    x = random_complex(rng, 64)

    np.testing.assert_allclose(fast_transform(x), np.fft.fft(x) / 64, atol=1e-12)
    np.testing.assert_allclose(fast_transform(x, inverse=True), np.fft.ifft(x) * 64, atol=1e-9)


def test_input_is_not_modified(rng):
    x = random_complex(rng, 32)
    original = x.copy()
    fast_transform(x)
    general_transform(x)
    assert np.array_equal(x, original)


def test_real_input_accepted():
    out = fast_transform([1.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(out, [0.25] * 4, atol=1e-15)


@pytest.mark.parametrize("length", [3, 5, 30, 100])
def test_general_transform_any_length(rng, length):
    x = random_complex(rng, length)
    np.testing.assert_allclose(general_transform(x), np.fft.fft(x) / length, atol=1e-9)


def test_cosine_table_matches_direct_twiddles(rng):
    table = cosine_table(4096)
    for length in (2, 8, 512, 4096):
        x = random_complex(rng, length)
        np.testing.assert_allclose(fast_transform(x, table=table), fast_transform(x), atol=1e-9)


@pytest.mark.parametrize("length", [0, 1, 3, 12, 100])
def test_fast_transform_rejects_bad_lengths(length):
    with pytest.raises(InvalidLengthError, match="power of 2"):
        fast_transform(np.zeros(length, dtype=np.complex128))


@pytest.mark.parametrize("length", [0, 1])
def test_general_transform_rejects_short_lengths(length):
    with pytest.raises(InvalidLengthError, match="minimum of 2"):
        general_transform(np.zeros(length, dtype=np.complex128))


def test_length_exceeding_table():
    with pytest.raises(LengthExceedsTableError, match="exceeds maximum of 8"):
        fast_transform(np.zeros(16), table=cosine_table(8))


def test_cosine_table_size_validated():
    with pytest.raises(InvalidLengthError):
        cosine_table(100)


def test_general_transform_allocation_failure(monkeypatch):
    def out_of_memory(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(fft.np, "outer", out_of_memory)
    with pytest.raises(AllocationFailureError, match="unable to allocate"):
        general_transform(np.ones(8))


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        fast_transform(np.zeros(3))

"""
Complex Fourier Transforms - Decimation in Time
===============================================

fast_transform() is an iterative radix-2 FFT restricted to power-of-two
lengths (pad with zeros if needed). general_transform() has the same
interface but handles any length >= 2 by direct O(n^2) summation.

Normalization convention
------------------------
Both transforms conjugate the input before and after an inverse (synthesis)
transform. The *forward* transform divides every output sample by the
length; the *inverse* transform is left unscaled. A forward followed by an
inverse therefore reconstructs the input exactly once. Callers that want
textbook inverse scaling must divide by the length themselves.
"""

from typing import Optional

import numpy as np

from .errors import AllocationFailureError, InvalidLengthError, LengthExceedsTableError

# Size of the default cosine lookup table, matching COEFFTOTAL
TABLE_SIZE = 4096


# ───────────────────────── helpers ────────────────────────── #

def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


def cosine_table(size: int = TABLE_SIZE) -> np.ndarray:
    """
    Return cos(2πi/size) for i in [0, size).

    The table maps one full period of cosine onto `size` entries; a quarter
    period offset gives -sine, so one table serves both twiddle components.
    """
    if size < 4 or not is_power_of_two(size):
        raise InvalidLengthError(f"cosine table size ({size}) must be a power of 2 and >= 4")
    return np.cos(2 * np.pi * np.arange(size, dtype=np.float64) / size)


def bit_reverse(samples: np.ndarray) -> None:
    """
    Permute `samples` in place into bit-reversed index order.

    Applying the permutation twice restores the original order. The
    array length must be a power of two.
    """
    length = len(samples)
    if not is_power_of_two(length):
        raise InvalidLengthError(f"bit_reverse(): length ({length}) is not a power of 2")

    bits = length.bit_length() - 1
    idx = np.arange(length)
    rev = np.zeros(length, dtype=np.intp)
    for b in range(bits):
        rev |= ((idx >> b) & 1) << (bits - 1 - b)

    samples[:] = samples[rev]


def _primitive_twiddle(n: int, table: Optional[np.ndarray]) -> complex:
    # W1 = exp(-2πi/n)
    if table is None:
        return complex(np.cos(2 * np.pi / n), -np.sin(2 * np.pi / n))
    size = len(table)
    step = size // n
    return complex(table[step], table[(step + size // 4) & (size - 1)])


def _as_complex(samples) -> np.ndarray:
    x = np.array(samples, dtype=np.complex128)
    if x.ndim != 1:
        raise InvalidLengthError(f"transform input must be one-dimensional, got shape {x.shape}")
    return x


# ───────────────────────── transforms ────────────────────────── #

def fast_transform(samples, inverse: bool = False,
                   table: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Radix-2 decimation-in-time FFT.

    Parameters
    ----------
    samples : array_like
        Complex (or real) input of power-of-two length >= 2. Not modified.
    inverse : bool
        Perform the synthesis transform (unnormalized).
    table : np.ndarray, optional
        Cosine lookup table from cosine_table(). When given, twiddle factors
        are read from it and the length must not exceed its size.

    Returns
    -------
    np.ndarray
        Transformed complex128 samples.
    """
    x = _as_complex(samples)
    length = x.shape[0]

    if length < 2 or not is_power_of_two(length):
        raise InvalidLengthError(
            f"fft(): requested FFT length ({length}) is not a power of 2")
    if table is not None and length > len(table):
        raise LengthExceedsTableError(
            f"fft(): requested FFT length ({length}) exceeds maximum of {len(table)}")

    if inverse:
        x = np.conj(x)

    bit_reverse(x)

    # One pass per n-point DFT stage
    n = 2
    while n <= length:
        half = n >> 1
        w1 = _primitive_twiddle(n, table)

        # W^k for k in [0, n/2), each from the previous power times W^1
        wk = np.full(half, w1, dtype=np.complex128)
        wk[0] = 1.0
        wk = np.cumprod(wk)

        # Each row is one n-point butterfly group
        blocks = x.reshape(-1, n)
        top = blocks[:, :half].copy()
        bottom = blocks[:, half:] * wk
        blocks[:, :half] = top + bottom
        blocks[:, half:] = top - bottom

        n <<= 1

    if inverse:
        return np.conj(x)
    return x / length


def general_transform(samples, inverse: bool = False) -> np.ndarray:
    """
    Direct O(n^2) DFT for arbitrary lengths >= 2.

    Uses the same conjugation and normalization convention as
    fast_transform(), so the two agree for power-of-two lengths.
    """
    x = _as_complex(samples)
    length = x.shape[0]

    if length < 2:
        raise InvalidLengthError(
            f"dft(): requested DFT length ({length}) is less than minimum of 2")

    if inverse:
        x = np.conj(x)

    try:
        k = np.arange(length)
        kernel = np.exp(-2j * np.pi * (np.outer(k, k) % length) / length)
    except MemoryError as exc:
        raise AllocationFailureError("dft(): unable to allocate memory") from exc

    out = kernel @ x

    if inverse:
        return np.conj(out)
    return out / length

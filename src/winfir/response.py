"""
Magnitude, decibel and phase views of a designed frequency response.

Only the first half of the COEFFTOTAL-point buffer (DC up to Fs/2) is
returned; the second half mirrors it for real taps.
"""

import numpy as np

from .filter_design import COEFFTOTAL

# dB value substituted for anything lower (including log(0))
PLOTMINIMUM = -400.0


def frequency_axis(sample_rate: float, total: int = COEFFTOTAL) -> np.ndarray:
    """Bin frequencies in Hz, step Fs/total, for the first half of the buffer."""
    return np.arange(total // 2) * (sample_rate / total)


def magnitude(response: np.ndarray, normalise: bool = True) -> np.ndarray:
    mag = np.abs(response)
    if normalise:
        peak = mag.max()
        if peak > 0:
            mag = mag / peak
    return mag[: len(response) // 2]


def decibels(response: np.ndarray, floor: float = PLOTMINIMUM) -> np.ndarray:
    """20 log10(|H| / max |H|), clipped at `floor`."""
    mag = np.abs(response)
    peak = mag.max()
    half = len(response) // 2
    if peak == 0:
        return np.full(half, floor)
    with np.errstate(divide="ignore"):
        mag_db = 20 * np.log10(mag[:half] / peak)
    return np.maximum(mag_db, floor)


def phase_degrees(response: np.ndarray) -> np.ndarray:
    """Four-quadrant phase in degrees, (-180, 180]."""
    half = len(response) // 2
    return np.degrees(np.arctan2(response.imag[:half], response.real[:half]))


def impulse_taps(response: np.ndarray, taps: int, quantization: int = 0) -> np.ndarray:
    """
    The N taps of an impulse-response buffer (design_filter with impulse=True).

    Quantized designs (Q > 0) come back as int64.
    """
    values = response.real[:taps]
    if quantization > 0:
        return values.astype(np.int64)
    return values.copy()

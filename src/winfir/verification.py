"""
Verification tools for designed filters.

Cross-checks the package's own transform against scipy and measures
pass/stop band figures with scipy.signal.
"""

from typing import Any, Dict, Optional

import numpy as np
from matplotlib.figure import Figure
from scipy import signal

from .response import decibels, frequency_axis, phase_degrees


def verify_filter_response(
    coefficients: np.ndarray,
    sample_rate: float,
    passband_edge: Optional[float] = None,
    stopband_edge: Optional[float] = None,
    target_stopband_db: float = 60.0,
    target_passband_ripple_db: float = 0.1,
    worN: int = 8192
) -> Dict[str, Any]:
    """
    Measure a low-pass shaped filter against its targets.

    Parameters
    ----------
    coefficients : np.ndarray
        Filter taps
    sample_rate : float
        Sample rate in Hz
    passband_edge, stopband_edge : float, optional
        Band edges in Hz. Default to 90 % / 110 % of the -3 dB point.
    target_stopband_db : float
        Target stopband attenuation in dB
    target_passband_ripple_db : float
        Target passband ripple in dB (peak to peak)
    worN : int
        Number of frequency points

    Returns
    -------
    dict
        Verification results
    """
    w, h = signal.freqz(coefficients, worN=worN)
    freq = w * sample_rate / (2 * np.pi)
    mag = np.abs(h)
    mag_db = 20 * np.log10(mag / mag.max() + 1e-300)

    # -3 dB point
    idx_3db = int(np.argmin(np.abs(mag_db + 3)))
    f_3db = freq[idx_3db]

    if passband_edge is None:
        passband_edge = 0.9 * f_3db
    if stopband_edge is None:
        stopband_edge = 1.1 * f_3db

    pb = freq <= passband_edge
    sb = freq >= stopband_edge

    ripple_db = float(np.ptp(mag_db[pb])) if np.any(pb) else 0.0
    stopband_peak_db = float(np.max(mag_db[sb])) if np.any(sb) else -np.inf

    # Group delay over the passband
    _, gd = signal.group_delay((coefficients, 1), w=w)
    gd_variation = float(np.ptp(gd[pb])) if np.any(pb) else 0.0

    return {
        'f_3db': float(f_3db),
        'passband_ripple_db': ripple_db,
        'stopband_atten_db': -stopband_peak_db,
        'group_delay_var': gd_variation,
        'meets_stopband': -stopband_peak_db >= target_stopband_db,
        'meets_passband': ripple_db <= target_passband_ripple_db,
    }


def compare_with_scipy(response: np.ndarray, coefficients: np.ndarray) -> Dict[str, Any]:
    """
    Compare a design_filter() frequency response with scipy.signal.freqz.

    The forward transform divides by its length, so the response is
    rescaled by len(response) before comparing.
    """
    total = len(response)
    _, h = signal.freqz(coefficients, worN=total // 2)
    ours = response[: total // 2] * total

    error = np.abs(ours - h)
    return {
        'points': total // 2,
        'max_abs_error': float(error.max()),
        'max_rel_error': float(error.max() / max(np.abs(h).max(), 1e-300)),
    }


def plot_response(
    response: np.ndarray,
    sample_rate: float,
    title: str = "Frequency Response",
    floor_db: float = -200.0
) -> Figure:
    """
    Build (but don't show) a magnitude/phase figure for a frequency response.
    """
    freq = frequency_axis(sample_rate, len(response))

    fig = Figure(figsize=(10, 8), layout="constrained")
    ax1, ax2 = fig.subplots(2, 1)

    ax1.plot(freq / 1000, np.maximum(decibels(response), floor_db))
    ax1.set_xlabel('Frequency (kHz)')
    ax1.set_ylabel('Magnitude (dB)')
    ax1.set_title(title)
    ax1.grid(True, alpha=0.3)
    ax1.set_ylim(floor_db, 5)

    ax2.plot(freq / 1000, phase_degrees(response))
    ax2.set_xlabel('Frequency (kHz)')
    ax2.set_ylabel('Phase (deg)')
    ax2.grid(True, alpha=0.3)

    return fig

"""
Window-Method FIR Filter Designer
=================================

Pipeline: specification → ideal impulse response → windowed response →
quantized coefficients → (optional) frequency response.

- Low-pass kernels are sampled sinc functions; spectral inversion turns
  them into high-pass, spectral reversal mirrors the passband about Fs/4.
- Band-pass is the convolution of a low-pass at the upper edge with a
  reversed low-pass mirroring the lower edge (intersection of passbands).
- Band-stop is the sum of a low-pass at the lower edge and a reversed
  low-pass mirroring the upper edge (union of passbands).
- Quantization scales the centre tap to 2^(Q-1) - 1 and rounds, for
  studying fixed-point hardware implementations.
- The frequency response is the forward FFT of the quantized taps padded
  with zeros to COEFFTOTAL points.

Example
-------
>>> spec = FilterSpec(cutoff=20000, sample_rate=192000, taps=120,
...                   window=Window.KAISER, alpha=5.4)
>>> response, window = design_filter(spec)
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .errors import FilterDesignError, InvalidSpecError, TapCountExceededError, TransformFailedError
from .fft import fast_transform
from .kaiser import design_kaiser, kaiser_attenuation
from .windows import Window, WindowSession

# Number of points in the (zero padded) coefficient/response buffer
COEFFTOTAL = 4 * 1024


# ───────────────────────── Data structures ────────────────────────── #

@dataclass
class FilterSpec:
    """Complete specification of a filter design."""
    cutoff: float = 20000.0          # Fc, Hz
    sample_rate: float = 192000.0    # Fs, Hz
    band_width: float = 10000.0      # Fw, Hz (band-pass/band-stop only)
    taps: int = 120                  # N
    quantization: int = 0            # Q: 0 float64, <0 float32, >0 signed Q-bit
    window: Window = Window.HAMMING
    alpha: Optional[float] = None    # None → window default
    inversion: bool = False
    reversal: bool = False
    bandpass: bool = False
    bandstop: bool = False
    impulse: bool = False            # return taps instead of frequency response
    ripple: float = 0.0              # dB magnitude; non-zero enables Kaiser auto-design
    transition_width: float = 4000.0  # Hz, for auto-design

    def __post_init__(self):
        if isinstance(self.window, str):
            self.window = Window.from_name(self.window)

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2

    @property
    def window_alpha(self) -> float:
        return self.window.resolve_alpha(self.alpha)

    @property
    def filter_type(self) -> str:
        if self.bandpass:
            return "band-pass"
        if self.bandstop:
            return "band-stop"
        kind = "high-pass" if self.inversion else "low-pass"
        return f"reversed {kind}" if self.reversal else kind

    def validate(self) -> None:
        """Raise InvalidSpecError / TapCountExceededError for an unusable spec."""
        if self.sample_rate <= 0:
            raise InvalidSpecError(f"Sample frequency must be positive, got {self.sample_rate} Hz")
        if self.cutoff < 0:
            raise InvalidSpecError(f"Cut off frequency must be positive, got {self.cutoff} Hz")
        if self.cutoff >= self.nyquist:
            raise InvalidSpecError(
                f"Cut off frequency ({self.cutoff} Hz) must be less than half the "
                f"sampling frequency ({self.nyquist} Hz)")
        if self.band_width < 0:
            raise InvalidSpecError(f"Band pass/stop width must be positive, got {self.band_width} Hz")
        if self.bandpass and self.bandstop:
            raise InvalidSpecError("Can't specify both band pass and band stop simultaneously")
        if (self.bandpass or self.bandstop) and self.inversion:
            raise InvalidSpecError("Can't use spectral inversion with band pass/stop")
        if (self.bandpass or self.bandstop) and self.cutoff + self.band_width >= self.nyquist:
            raise InvalidSpecError(
                f"Band width puts upper cut off ({self.cutoff + self.band_width} Hz) "
                f"at or above half the sampling rate ({self.nyquist} Hz)")
        if self.taps < 1:
            raise InvalidSpecError(f"Number of taps must be positive, got {self.taps}")
        if self.taps > COEFFTOTAL:
            raise TapCountExceededError(
                f"Taps ({self.taps}) mustn't be greater than number of coefficients ({COEFFTOTAL})")
        if self.window is Window.CHEBYSHEV and self.taps < 2:
            raise InvalidSpecError(f"Chebyshev window needs at least 2 taps, got {self.taps}")
        if self.quantization > 64:
            raise InvalidSpecError(f"Q must be 64 bits or less, got {self.quantization}")
        if self.alpha is not None and self.alpha < 0:
            raise InvalidSpecError(f"Window alpha must be positive, got {self.alpha}")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["window"] = self.window.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "FilterSpec":
        return cls(**d)


# ───────────────────────── impulse synthesis ────────────────────────── #

def tap_indices(taps: int) -> np.ndarray:
    """Tap positions n from -N/2 to N/2; storage index 0 is n = -N/2."""
    half = taps // 2
    return np.arange(-half, half + 1)


def sinc(x, cutoff: float, sample_rate: float, invert: bool = False):
    """
    Scaled sinc, (2 Fc/Fs) sin(x)/x, for x = 2π Fc n / Fs.

    Inversion negates every value except x = 0, where the value is
    subtracted from 1, giving the spectral complement.
    """
    scale = 2.0 * cutoff / sample_rate
    x = np.asarray(x, dtype=np.float64)
    centre = 1.0 - scale if invert else scale
    sign = -1.0 if invert else 1.0
    with np.errstate(divide="ignore", invalid="ignore"):
        value = np.where(x == 0.0, centre, scale * np.sin(x) / x * sign)
    return value[()]


def generate_impulse(spec: FilterSpec) -> np.ndarray:
    """Unwindowed impulse response; reversal negates the taps at odd n."""
    n = tap_indices(spec.taps)
    x = 2 * np.pi * spec.cutoff * n / spec.sample_rate
    result = np.asarray(sinc(x, spec.cutoff, spec.sample_rate, spec.inversion), dtype=np.float64)
    if spec.reversal:
        result = np.where(np.abs(n) % 2 == 1, -result, result)
    return result


def band_specs(spec: FilterSpec) -> Tuple[FilterSpec, FilterSpec]:
    """
    The two low-pass style designs combined into a band-pass/band-stop.

    Fc is the lower band edge and Fc + Fw the upper. Branch A is a low-pass
    at the upper edge (band-pass) or the lower edge (band-stop). Branch B
    is cut at the mirror of the other edge with reversal flipped, which
    turns it into a high-pass at that edge.
    """
    upper = spec.cutoff + (spec.band_width if spec.bandpass else 0.0)
    mirrored = spec.nyquist - (spec.cutoff + (0.0 if spec.bandpass else spec.band_width))
    return (replace(spec, cutoff=upper),
            replace(spec, cutoff=mirrored, reversal=not spec.reversal))


def convolve(s1: np.ndarray, s2: np.ndarray, taps: int) -> np.ndarray:
    """
    Linear convolution of the first `taps` points of s1 and s2.

    Output x gathers s1[j] s2[x + N/2 - j] over indices inside [0, N), so
    the result stays centred on the middle tap.
    """
    out = np.zeros(len(s1), dtype=np.float64)
    full = np.convolve(s1[:taps], s2[:taps])
    segment = full[taps // 2: taps // 2 + len(out)]
    out[:len(segment)] = segment
    return out


def add(s1: np.ndarray, s2: np.ndarray) -> np.ndarray:
    return s1 + s2


def apply_window(result: np.ndarray, spec: FilterSpec) -> Tuple[np.ndarray, np.ndarray]:
    """Multiply each tap by its window gain; returns (windowed, window coefficients)."""
    session = WindowSession(spec.window, spec.alpha, spec.taps)
    window = session.coefficients()
    return result * window, window


def quantize(result: np.ndarray, spec: FilterSpec) -> np.ndarray:
    """
    Cast the first N taps into a COEFFTOTAL-point complex buffer.

    Q > 0 scales so the centre tap becomes 2^(Q-1) - 1 and rounds to
    integer values, halves away from zero (add 0.5 to the magnitude, then
    truncate); Q < 0 truncates to float32; Q == 0 passes through.
    The gain of a quantized filter is therefore 2^(Q-1) / (2 Fc/Fs).
    """
    N = spec.taps
    Q = spec.quantization
    taps = result[:N]

    if Q > 0:
        centre = result[N // 2]
        if centre == 0.0:
            raise InvalidSpecError("Centre tap is zero; can't scale for quantization")
        scale = ((1 << (Q - 1)) - 1) / centre
        scaled = taps * scale
        values = np.sign(scaled) * np.floor(np.abs(scaled) + 0.5)
    elif Q < 0:
        values = taps.astype(np.float32).astype(np.float64)
    else:
        values = taps

    out = np.zeros(COEFFTOTAL, dtype=np.complex128)
    out[:N] = values
    return out


# ───────────────────────── design routine ────────────────────────── #

def resolve_spec(spec: FilterSpec, log: Optional[logging.Logger] = None) -> FilterSpec:
    """Apply Kaiser auto-design when a ripple is given; otherwise return spec unchanged."""
    if spec.ripple == 0.0:
        return spec
    if log is None:
        log = logging.getLogger(__name__)

    design = design_kaiser(spec.transition_width, spec.sample_rate, spec.ripple)
    if design.taps > COEFFTOTAL:
        raise TapCountExceededError(
            f"Taps ({design.taps}) calculated > number of coefficients ({COEFFTOTAL})")

    log.info("Kaiser auto-design: %.1f dB over %.1f Hz ⇒ N=%d, α=%.3f (≈ %.1f dB)",
             spec.ripple, spec.transition_width, design.taps, design.alpha,
             kaiser_attenuation(design.taps, spec.transition_width, spec.sample_rate))
    return replace(spec, taps=design.taps, alpha=design.alpha, window=Window.KAISER)


def design_filter(spec: FilterSpec,
                  log: Optional[logging.Logger] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Design a filter for `spec`.

    Returns
    -------
    response : np.ndarray
        COEFFTOTAL complex points: the quantized impulse response (zero
        padded) when spec.impulse is set, else its forward FFT.
    window : np.ndarray
        Window coefficients, one per tap position -N/2..N/2.
    """
    if log is None:
        log = logging.getLogger(__name__)

    t0 = time.perf_counter()
    spec = resolve_spec(spec, log)
    spec.validate()

    log.info("Designing %d-tap %s filter: Fc=%.1f Hz, Fs=%.1f Hz, %s window (α=%.3f), Q=%d",
             spec.taps, spec.filter_type, spec.cutoff, spec.sample_rate,
             spec.window.display_name, spec.window_alpha, spec.quantization)

    if spec.bandpass or spec.bandstop:
        spec_a, spec_b = band_specs(spec)
        log.debug("Band edges: branch A Fc=%.1f Hz, branch B Fc=%.1f Hz (reversed=%s)",
                  spec_a.cutoff, spec_b.cutoff, spec_b.reversal)
        r1 = generate_impulse(spec_a)
        r2 = generate_impulse(spec_b)
        if spec.bandpass:
            result = convolve(r1, r2, spec.taps)
        else:
            result = add(r1, r2)
    else:
        result = generate_impulse(spec)

    result, window = apply_window(result, spec)
    response = quantize(result, spec)

    if not spec.impulse:
        try:
            response = fast_transform(response)
        except FilterDesignError as exc:
            raise TransformFailedError(f"Frequency response transform failed: {exc}") from exc

    log.info("Filter designed in %.3f seconds", time.perf_counter() - t0)
    return response, window

"""
Window Function Library
=======================

Every shape is a function ``fn(a, n, N)`` giving the gain of tap ``n``
(running from -N/2 to N/2) for an N-tap window with shape parameter ``a``.
Shapes that take no parameter ignore ``a``. All functions accept a scalar
or a numpy array of tap indices.

Two shapes carry state across taps:

- kaiser() memoizes I0(a) for the last alpha it saw.
- chebyshev() builds its time-domain table on the first tap of a pass and
  drops it on the last, so it must be called once per tap in increasing
  order with nothing interleaved.

Both module-level caches are single-threaded. WindowSession holds the
same state explicitly for one (window, alpha, N) pass and is what the
design pipeline uses.
"""

import logging
from enum import Enum
from typing import Optional, Union

import numpy as np
from scipy.special import factorial as _sp_factorial

from .errors import InvalidLengthError
from .fft import fast_transform, general_transform, is_power_of_two

log = logging.getLogger(__name__)

# Hamming alpha values giving the less general windows
UNIFORM_ALPHA = 0.00
VONHANN_ALPHA = 0.25
DEFAULT_HAMMING_ALPHA = 0.23
DEFAULT_KAISER_ALPHA = 5.4
DEFAULT_COMMON_ALPHA = 2.0
DEFAULT_TUKEY_ALPHA = 0.5
DEFAULT_COSINE_ALPHA = 1.0
NULL_ALPHA = 0.0

# Terms in the I0 power series
BESSEL_TERMS = 69

_FACTORIALS = _sp_factorial(np.arange(BESSEL_TERMS + 1), exact=False).astype(np.float64)
_SERIES_K = np.arange(1, BESSEL_TERMS + 1)


def _scalar(value):
    # 0-d results come back as numpy scalars, arrays stay arrays
    return np.asarray(value)[()]


def _taps(n) -> np.ndarray:
    return np.asarray(n, dtype=np.float64)


# ───────────────────────── Bessel I0 ────────────────────────── #

def factorial(k: int) -> float:
    """k! from the precomputed table for 0 <= k <= 69, 0.0 otherwise."""
    if 0 <= k <= BESSEL_TERMS:
        return float(_FACTORIALS[k])
    return 0.0


def bessel_i0(x):
    """
    Modified Bessel function of the first kind, order 0.

    I0(x) = 1 + sum_{k=1}^{69} ((x/2)^k / k!)^2
    """
    x = np.asarray(x, dtype=np.float64)
    terms = ((x[..., np.newaxis] / 2.0) ** _SERIES_K / _FACTORIALS[1:]) ** 2
    return _scalar(1.0 + terms.sum(axis=-1))


# ───────────────────────── stateless shapes ────────────────────────── #

def uniform(a, n, N):
    return _scalar(np.ones_like(_taps(n)))


def bartlett(a, n, N):
    """Triangular: 0 at n = ±N/2, 1 at n = 0."""
    n = _taps(n)
    return _scalar(1.0 - np.abs(np.trunc(n)) / (N / 2))


def hamming(a, n, N):
    """
    Raised cosine 2a cos(2πn/N) + b, with 2a + b = 1.

    a = 0 gives a uniform window, a = 0.25 von Hann, a = 0.23 Hamming.
    """
    n = _taps(n)
    b = 1.0 - (2.0 * a)
    return _scalar((np.cos((2 * np.pi) * n / N) * 2.0 * a) + b)


def blackman(a, n, N):
    wT = 0.5 + _taps(n) / N
    return _scalar(0.42 - 0.5 * np.cos((2 * np.pi) * wT)
                   + 0.08 * np.cos(2.0 * (2 * np.pi) * wT))


def blackman_harris(a, n, N):
    wT = 0.5 + _taps(n) / N
    return _scalar(0.35875 - 0.48829 * np.cos((2 * np.pi) * wT)
                   + 0.14128 * np.cos(2.0 * (2 * np.pi) * wT)
                   - 0.01168 * np.cos(3.0 * (2 * np.pi) * wT))


def nuttall(a, n, N):
    """Blackman-Harris family member with Nuttall's coefficients."""
    wT = 0.5 + _taps(n) / N
    return _scalar(0.3635819 - 0.4891775 * np.cos((2 * np.pi) * wT)
                   + 0.1365995 * np.cos(2.0 * (2 * np.pi) * wT)
                   - 0.0106411 * np.cos(3.0 * (2 * np.pi) * wT))


def bohman(a, n, N):
    wT = 2.0 * _taps(n) / N
    abs_wT = np.abs(wT)
    return _scalar((1.0 - abs_wT) * np.cos(np.pi * wT) + np.sin(np.pi * abs_wT) / np.pi)


def cauchy(a, n, N):
    wT = 2.0 * _taps(n) / N
    return _scalar(1 / (1 + (a * a * wT * wT)))


def cosine(a, n, N):
    """Cosine over -π/2..π/2 raised to the power a."""
    return _scalar(np.power(np.cos(np.pi * _taps(n) / N), a))


def gauss(a, n, N):
    """Gaussian with sigma a over ±π, unnormalized so the peak is 1."""
    x = (2 * np.pi) * _taps(n) / N
    return _scalar(np.exp((-1.0 * x * x) / (2.0 * a * a)))


def poisson(a, n, N):
    x = 2.0 * np.abs(_taps(n)) / N
    return _scalar(np.exp(-1.0 * a * x))


def reisz(a, n, N):
    x = 2.0 * np.abs(_taps(n)) / N
    return _scalar(1.0 - (x * x))


def riemann(a, n, N):
    x = 2.0 * _taps(n) / N
    with np.errstate(divide="ignore", invalid="ignore"):
        return _scalar(np.where(x == 0, 1.0, np.sin(np.pi * x) / (np.pi * x)))


def tukey(a, n, N):
    """Flat for |x| < a, cosine taper to the edges otherwise."""
    x = 2.0 * np.abs(_taps(n)) / N
    with np.errstate(divide="ignore", invalid="ignore"):
        return _scalar(np.where(x < a, 1.0, 0.5 * (1.0 + np.cos(np.pi * (x - a) / (1 - a)))))


def vallepoisson(a, n, N):
    x = 2.0 * np.abs(_taps(n)) / N
    return _scalar(np.where(x < 0.5,
                            1.0 - 6 * x * x * (1 - x),
                            2 * (1 - x) * (1 - x) * (1 - x)))


# ───────────────────────── Kaiser ────────────────────────── #

_kaiser_alpha: Optional[float] = None
_kaiser_i0 = 1.0


def _kaiser_shape(a, n, N, i0_a):
    n = _taps(n)
    return _scalar(bessel_i0(a * np.sqrt(1.0 - ((n * n) * 4.0 / (N * N)))) / i0_a)


def kaiser(a, n, N):
    """
    Kaiser-Bessel window, I0(a sqrt(1 - (2n/N)^2)) / I0(a).

    a = 0 gives a uniform window; a ≈ 5.4 resembles Hamming. I0(a) is
    memoized on the last alpha seen (not thread-safe).
    """
    global _kaiser_alpha, _kaiser_i0
    if _kaiser_alpha is None or a != _kaiser_alpha:
        _kaiser_i0 = bessel_i0(a)
        _kaiser_alpha = a
    return _kaiser_shape(a, n, N, _kaiser_i0)


# ───────────────────────── Chebyshev ────────────────────────── #

def _chebyshev_polynomial(m, x):
    """T_m(x) via cos(m acos x) for x <= 1, cosh(m acosh x) above."""
    x = np.asarray(x, dtype=np.float64)
    return np.where(x <= 1.0,
                    np.cos(m * np.arccos(np.clip(x, -1.0, 1.0))),
                    np.cosh(m * np.arccosh(np.maximum(x, 1.0))))


class ChebyshevTable:
    """
    Time-domain Chebyshev window for one (alpha, N) pair.

    The frequency response

        W(k) = T_{N-1}(beta cos(π k/N)),  beta = cosh(acosh(10^a) / (N-1))

    is inverse transformed (FFT for power-of-two N, DFT otherwise) and
    normalized by its largest real value. The denominator T_{N-1}(beta) is
    skipped since the normalization absorbs it. Taps may be looked up in
    any order.
    """

    def __init__(self, alpha: float, taps: int):
        M = int(taps)
        if M < 2:
            raise InvalidLengthError(f"Chebyshev window needs at least 2 taps, got {M}")

        self.alpha = alpha
        self.taps = M

        beta = np.cosh(np.arccosh(10.0 ** alpha) / (M - 1))

        i = np.arange(M)
        spectrum = np.zeros(M, dtype=np.complex128)
        spectrum[(i + M // 2) % M] = _chebyshev_polynomial(
            M - 1, beta * np.cos(np.pi * (i - M / 2.0) / M))

        if is_power_of_two(M):
            response = fast_transform(spectrum, inverse=True)
        else:
            response = general_transform(spectrum, inverse=True)

        real = response.real
        self.values = real / real.max()

        log.debug("Chebyshev table: N=%d alpha=%.3f beta=%.9f (%s)",
                  M, alpha, beta, "fft" if is_power_of_two(M) else "dft")

    def __call__(self, n):
        # Tap n lives at (n + N) mod N, so n = 0 hits the table peak
        k = np.asarray(n).astype(np.intp)
        return _scalar(self.values[(k + self.taps) % self.taps])


_chebyshev_pass: Optional[ChebyshevTable] = None


def chebyshev(a, n, N):
    """
    Chebyshev window, one tap at a time.

    The first tap of a pass (n == -N/2) builds the table and the last
    (n == N/2 - 1) releases it. Callers must step n upwards one tap at a
    time for a single (a, N) with no other pass interleaved; outside a live
    pass the gain is 0.0. Use ChebyshevTable where order can't be
    guaranteed.
    """
    global _chebyshev_pass
    M = int(N)
    k = int(n)

    if k == -(M // 2):
        _chebyshev_pass = ChebyshevTable(a, M)

    if _chebyshev_pass is None:
        return 0.0

    result = float(_chebyshev_pass(k))

    if k == M // 2 - 1:
        _chebyshev_pass = None

    return result


# ───────────────────────── selection ────────────────────────── #

class Window(Enum):
    """Window shapes selectable for a filter design."""

    UNIFORM = "uniform"
    BARTLETT = "bartlett"
    HAMMING = "hamming"
    VON_HANN = "von_hann"
    BLACKMAN = "blackman"
    BLACKMAN_HARRIS = "blackman_harris"
    NUTTALL = "nuttall"
    BOHMAN = "bohman"
    CAUCHY = "cauchy"
    COSINE = "cosine"
    GAUSSIAN = "gaussian"
    POISSON = "poisson"
    REISZ = "reisz"
    RIEMANN = "riemann"
    TUKEY = "tukey"
    VALLE_POISSON = "valle_poisson"
    KAISER = "kaiser"
    CHEBYSHEV = "chebyshev"

    @classmethod
    def from_name(cls, name: str) -> "Window":
        """Look up a window by value or display name ('Blackman-Harris', 'von Hann', ...)."""
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unsupported window type: {name}") from None

    @property
    def function(self):
        return _FUNCTIONS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES.get(self, self.value.replace("_", " ").title())

    @property
    def default_alpha(self) -> float:
        return _DEFAULT_ALPHAS.get(self, NULL_ALPHA)

    def resolve_alpha(self, alpha: Optional[float]) -> float:
        """The alpha a design actually uses: fixed for uniform / von Hann, else alpha or the default."""
        if self in _FIXED_ALPHAS:
            return _FIXED_ALPHAS[self]
        return self.default_alpha if alpha is None else float(alpha)


_ALIASES = {
    "hann": "von_hann",
    "vonhann": "von_hann",
    "gauss": "gaussian",
    "vallepoisson": "valle_poisson",
    "rectangular": "uniform",
    "triangular": "bartlett",
    "dolph_chebyshev": "chebyshev",
}

_DISPLAY_NAMES = {
    Window.VON_HANN: "von Hann",
    Window.BLACKMAN_HARRIS: "Blackman-Harris",
    Window.VALLE_POISSON: "Valle-Poisson",
}

_FUNCTIONS = {
    Window.UNIFORM: uniform,
    Window.BARTLETT: bartlett,
    Window.HAMMING: hamming,
    Window.VON_HANN: hamming,
    Window.BLACKMAN: blackman,
    Window.BLACKMAN_HARRIS: blackman_harris,
    Window.NUTTALL: nuttall,
    Window.BOHMAN: bohman,
    Window.CAUCHY: cauchy,
    Window.COSINE: cosine,
    Window.GAUSSIAN: gauss,
    Window.POISSON: poisson,
    Window.REISZ: reisz,
    Window.RIEMANN: riemann,
    Window.TUKEY: tukey,
    Window.VALLE_POISSON: vallepoisson,
    Window.KAISER: kaiser,
    Window.CHEBYSHEV: chebyshev,
}

_DEFAULT_ALPHAS = {
    Window.CAUCHY: DEFAULT_COMMON_ALPHA,
    Window.GAUSSIAN: DEFAULT_COMMON_ALPHA,
    Window.POISSON: DEFAULT_COMMON_ALPHA,
    Window.CHEBYSHEV: DEFAULT_COMMON_ALPHA,
    Window.KAISER: DEFAULT_KAISER_ALPHA,
    Window.TUKEY: DEFAULT_TUKEY_ALPHA,
    Window.COSINE: DEFAULT_COSINE_ALPHA,
    Window.HAMMING: DEFAULT_HAMMING_ALPHA,
    Window.VON_HANN: VONHANN_ALPHA,
}

_FIXED_ALPHAS = {
    Window.UNIFORM: UNIFORM_ALPHA,
    Window.VON_HANN: VONHANN_ALPHA,
}


class WindowSession:
    """
    One window-generation pass for a fixed (window, alpha, N).

    State the module-level kaiser()/chebyshev() keep globally (I0(alpha),
    the Chebyshev table) lives on the session instead, so taps can be
    evaluated in any order and sessions never interfere. Gains match a
    full ordered pass tap for tap.
    """

    def __init__(self, window: Union[Window, str], alpha: Optional[float], taps: int):
        if isinstance(window, str):
            window = Window.from_name(window)
        self.window = window
        self.alpha = window.resolve_alpha(alpha)
        self.taps = int(taps)
        self._i0: Optional[float] = None
        self._table: Optional[ChebyshevTable] = None

        if self.taps < 1:
            raise InvalidLengthError(f"window needs at least 1 tap, got {self.taps}")

        if window is Window.KAISER:
            self._i0 = bessel_i0(self.alpha)
        elif window is Window.CHEBYSHEV:
            self._table = ChebyshevTable(self.alpha, self.taps)
        elif window is Window.TUKEY and self.alpha >= 1.0:
            log.warning("Tukey alpha %.3f >= 1 leaves no taper; edge taps are undefined", self.alpha)

    def tap_indices(self) -> np.ndarray:
        """Tap positions -N/2 .. N/2 (integer division, as C truncates)."""
        half = self.taps // 2
        return np.arange(-half, half + 1)

    def gain(self, n):
        if self._i0 is not None:
            return _kaiser_shape(self.alpha, n, self.taps, self._i0)
        if self._table is not None:
            # The ordered pass releases its table before n = N/2, which reads 0
            k = np.asarray(n)
            return _scalar(np.where(k < self.taps // 2, self._table(k), 0.0))
        return self.window.function(self.alpha, n, self.taps)

    def coefficients(self) -> np.ndarray:
        """Gains for every tap position, aligned with tap_indices()."""
        return np.asarray(self.gain(self.tap_indices()), dtype=np.float64)


def window_gain(window: Union[Window, str], alpha: Optional[float], n, N: int):
    """Single stateless window evaluation."""
    return WindowSession(window, alpha, N).gain(n)

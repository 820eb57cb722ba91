"""
winfir - Window-method FIR filter design.
"""

from .errors import (
    AllocationFailureError,
    FilterDesignError,
    InvalidLengthError,
    InvalidSpecError,
    InvalidTransitionWidthError,
    LengthExceedsTableError,
    TapCountExceededError,
    TransformFailedError,
)
from .fft import bit_reverse, cosine_table, fast_transform, general_transform
from .filter_design import COEFFTOTAL, FilterSpec, design_filter, sinc
from .kaiser import KaiserDesign, design_kaiser
from .response import decibels, frequency_axis, impulse_taps, magnitude, phase_degrees
from .verification import compare_with_scipy, plot_response, verify_filter_response
from .windows import ChebyshevTable, Window, WindowSession, bessel_i0, window_gain

__version__ = "0.1.0"
__all__ = [
    "COEFFTOTAL",
    "FilterSpec",
    "design_filter",
    "sinc",
    "KaiserDesign",
    "design_kaiser",
    "Window",
    "WindowSession",
    "ChebyshevTable",
    "window_gain",
    "bessel_i0",
    "fast_transform",
    "general_transform",
    "bit_reverse",
    "cosine_table",
    "frequency_axis",
    "magnitude",
    "decibels",
    "phase_degrees",
    "impulse_taps",
    "verify_filter_response",
    "compare_with_scipy",
    "plot_response",
    "FilterDesignError",
    "InvalidLengthError",
    "LengthExceedsTableError",
    "AllocationFailureError",
    "InvalidTransitionWidthError",
    "TapCountExceededError",
    "TransformFailedError",
    "InvalidSpecError",
]

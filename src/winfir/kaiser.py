"""
Kaiser auto-design: ripple and transition width to taps and alpha.
"""

from typing import NamedTuple

from .errors import InvalidTransitionWidthError


class KaiserDesign(NamedTuple):
    taps: int
    alpha: float


def kaiser_alpha(ripple: float) -> float:
    """
    Kaiser shape parameter for a ripple spec in dB (positive magnitude).

    alpha = 0                                          ripple <= 21
    alpha = 0.5842 (ripple-21)^0.4 + 0.07886 (ripple-21)   21 < ripple < 50
    alpha = 0.1102 (ripple - 8.7)                       otherwise
    """
    if ripple <= 21.0:
        return 0.0
    if ripple < 50.0:
        return 0.5842 * (ripple - 21.0) ** 0.4 + 0.07886 * (ripple - 21.0)
    return 0.1102 * (ripple - 8.7)


def design_kaiser(transition_width: float, sample_rate: float, ripple: float) -> KaiserDesign:
    """
    Taps and alpha for a Kaiser-windowed filter.

    Parameters
    ----------
    transition_width : float
        Transition band width in Hz (Fd)
    sample_rate : float
        Sample rate in Hz (Fs)
    ripple : float
        Ripple / attenuation spec in dB as a positive magnitude

    Returns
    -------
    KaiserDesign
        (taps, alpha)
    """
    if transition_width < 0.0:
        raise InvalidTransitionWidthError(
            "design_kaiser(): must specify a positive transition width in auto-design mode "
            f"(got {transition_width} Hz)")
    if transition_width == 0.0:
        raise InvalidTransitionWidthError(
            "design_kaiser(): a zero transition width needs infinitely many taps")

    # Taps = (ripple - 7.95) / (14.36 Fd / (Fs/2)), +0.5 then truncate to round
    taps = int(0.5 + ((ripple - 7.95) / (14.36 * transition_width / (0.5 * sample_rate))))

    return KaiserDesign(taps, kaiser_alpha(ripple))


def kaiser_attenuation(taps: int, transition_width: float, sample_rate: float) -> float:
    """Attenuation in dB that `taps` taps achieve over the transition, inverting design_kaiser()."""
    return 7.95 + 14.36 * taps * transition_width / (0.5 * sample_rate)

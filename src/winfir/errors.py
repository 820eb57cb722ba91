"""Exceptions raised by the filter design pipeline."""


class FilterDesignError(ValueError):
    """Base exception for filter design errors."""

    pass


class InvalidLengthError(FilterDesignError):
    """Raised when a transform is given an unusable length.

    This occurs when:
    - Length is less than 2
    - The fast path is given a length that is not a power of two
    """

    pass


class LengthExceedsTableError(FilterDesignError):
    """Raised when the fast path is longer than its cosine lookup table."""

    pass


class AllocationFailureError(FilterDesignError):
    """Raised when the scratch kernel of the general transform can't be allocated."""

    pass


class InvalidTransitionWidthError(FilterDesignError):
    """Raised when Kaiser auto-design gets a transition width that isn't positive."""

    pass


class TapCountExceededError(FilterDesignError):
    """Raised when a requested or auto-designed tap count exceeds COEFFTOTAL."""

    pass


class TransformFailedError(FilterDesignError):
    """Raised when the forward transform of the frequency response fails."""

    pass


class InvalidSpecError(FilterDesignError):
    """Raised when a filter specification is contradictory or out of range.

    This occurs when:
    - Cutoff is negative or at/above Nyquist
    - Band edge Fc + Fw reaches Nyquist for band-pass/band-stop
    - Band-pass and band-stop are both requested
    - Spectral inversion is combined with band-pass/band-stop
    """

    pass

#!/usr/bin/env python3
"""
Tests for Kaiser auto-design.
"""

import pytest

from winfir.errors import InvalidTransitionWidthError
from winfir.kaiser import KaiserDesign, design_kaiser, kaiser_alpha, kaiser_attenuation


def test_reference_design():
    design = design_kaiser(4000, 192000, 60)
    assert isinstance(design, KaiserDesign)
    assert design.taps == 87
    assert design.alpha == pytest.approx(5.653, abs=1e-3)


def test_alpha_regimes():
    assert kaiser_alpha(10) == 0.0
    assert kaiser_alpha(21) == 0.0
    assert kaiser_alpha(30) == pytest.approx(0.5842 * 9 ** 0.4 + 0.07886 * 9)
    assert kaiser_alpha(50) == pytest.approx(0.1102 * 41.3)
    assert kaiser_alpha(80) == pytest.approx(0.1102 * 71.3)


def test_taps_round_to_nearest():
    # (40 - 7.95) / (14.36 * 1000 / 24000) = 53.56
    assert design_kaiser(1000, 48000, 40).taps == 54


def test_narrower_transition_needs_more_taps():
    wide = design_kaiser(8000, 192000, 60)
    narrow = design_kaiser(2000, 192000, 60)
    assert narrow.taps > wide.taps
    assert narrow.alpha == wide.alpha


@pytest.mark.parametrize("width", [-1.0, 0.0])
def test_unusable_transition_width(width):
    with pytest.raises(InvalidTransitionWidthError):
        design_kaiser(width, 192000, 60)


def test_attenuation_inverts_design():
    assert kaiser_attenuation(87, 4000, 192000) == pytest.approx(60.0, abs=0.1)

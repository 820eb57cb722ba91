#!/usr/bin/env python3
"""
Cross-checks of designed filters against scipy.signal, plus plotting.
"""

from dataclasses import replace

import numpy as np
from matplotlib.figure import Figure

from winfir.filter_design import FilterSpec, design_filter, resolve_spec
from winfir.response import impulse_taps
from winfir.verification import compare_with_scipy, plot_response, verify_filter_response


def design_pair(spec):
    spec = resolve_spec(spec)
    impulse, _ = design_filter(replace(spec, impulse=True))
    response, _ = design_filter(spec)
    return impulse_taps(impulse, spec.taps, spec.quantization), response


def test_response_matches_freqz():
    taps, response = design_pair(FilterSpec(window="kaiser", taps=100))
    result = compare_with_scipy(response, taps)
    assert result['points'] == 2048
    assert result['max_rel_error'] < 1e-9


def test_band_pass_matches_freqz():
    taps, response = design_pair(FilterSpec(bandpass=True, window="nuttall"))
    assert compare_with_scipy(response, taps)['max_rel_error'] < 1e-9


def test_kaiser_auto_design_meets_targets():
    taps, _ = design_pair(FilterSpec(cutoff=20000, ripple=60, transition_width=4000))
    result = verify_filter_response(taps, 192000,
                                    passband_edge=14000, stopband_edge=26000,
                                    target_stopband_db=50)
    assert result['meets_stopband']
    assert result['meets_passband']
    assert 17000 < result['f_3db'] < 20500
    # Linear phase: constant group delay
    assert result['group_delay_var'] < 1e-6


def test_plot_response_builds_figure():
    response, _ = design_filter(FilterSpec())
    fig = plot_response(response, 192000, title="Low-pass")
    assert isinstance(fig, Figure)
    ax1, ax2 = fig.axes
    assert ax1.get_title() == "Low-pass"
    assert ax1.get_ylabel() == "Magnitude (dB)"
    assert len(ax2.lines[0].get_xdata()) == 2048
    assert np.all(ax1.lines[0].get_ydata() >= -200)

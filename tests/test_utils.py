import numpy as np
import pytest
from scipy.signal import windows

from openftp.errors import DegenerateCarrierError, FilterBandOutOfRangeError
from openftp.utils import (find_carrier, find_carriers, filter_band, bandpass_window,
                           bandpass_windows, fringes, gaussian_bell, triangular_prism,
                           round_half_up)


def test_carrier_of_sinusoidal_row():
    row = fringes((1, 1000), 20)[0]
    assert find_carrier(np.fft.fft(row)) == 50


def test_carrier_detection_is_deterministic():
    row = fringes((1, 512), 16, phase=np.linspace(0, 3, 512).reshape(1, -1))[0]
    spectrum = np.fft.fft(row)
    assert len({find_carrier(spectrum) for __ in range(5)}) == 1


def test_carriers_of_every_row():
    img = np.vstack([fringes((2, 256), 16), fringes((3, 256), 8)])
    np.testing.assert_array_equal(find_carriers(np.fft.fft(img, axis=1)), [16, 16, 32, 32, 32])


@pytest.mark.parametrize("value", [0., 5.])
def test_flat_row_is_degenerate(value):
    with pytest.raises(DegenerateCarrierError):
        find_carrier(np.fft.fft(np.full(256, value)))


def test_peak_on_first_searched_bin_is_degenerate():
    row = np.sin(2*np.pi*9*np.arange(256)/256)
    with pytest.raises(DegenerateCarrierError) as err:
        find_carrier(np.fft.fft(row))
    assert err.value.row == 0


def test_degenerate_row_is_reported():
    img = fringes((6, 256), 16)
    img[4] = 1.
    with pytest.raises(DegenerateCarrierError) as err:
        find_carriers(np.fft.fft(img, axis=1))
    assert err.value.row == 4


def test_rows_too_short_to_search():
    with pytest.raises(DegenerateCarrierError):
        find_carrier(np.fft.fft(np.sin(np.arange(16.))))


def test_round_half_up():
    assert round_half_up(22.5) == 23
    assert round_half_up(30.6) == 31
    assert round_half_up(0.4) == 0


def test_filter_band():
    assert filter_band(50, 0.6, 1000) == (19, 81)
    assert filter_band(44, 0.5, 1000) == (21, 67)


@pytest.mark.parametrize("ifmax, th, cols", [(50, 1.2, 1000),
                                             (400, 0.6, 600),
                                             (10, 0.01, 100)])
def test_filter_band_out_of_range(ifmax, th, cols):
    with pytest.raises(FilterBandOutOfRangeError) as err:
        filter_band(ifmax, th, cols, row=7)
    assert err.value.row == 7
    assert err.value.cols == cols


def test_window_is_a_symmetric_band():
    win = bandpass_window(1000, 50, 0.6, ns=1)
    assert win.shape == (1000,)
    assert np.all(win[:19] == 0) and np.all(win[81:] == 0)
    band = win[19:81]
    assert len(band) == 2*round_half_up(51*0.6)
    np.testing.assert_allclose(band, band[::-1])
    assert np.all(band[1:-1] > 0)
    np.testing.assert_allclose(band, windows.hann(62))


@pytest.mark.parametrize("period, th, ns", [(20, 0.6, 1), (16, 0.45, 0.3), (25, 0.8, 0)])
def test_window_of_one_based_carrier_index(period, th, ns):
    row = fringes((1, 1000), period)[0]
    ifmax = find_carrier(np.fft.fft(row))
    # band placed from the carrier index counted from 1
    rank = ifmax + 1
    half_width = int(np.floor(rank*th + 0.5))
    expected = np.zeros(1000)
    expected[rank - half_width - 1:rank + half_width - 1] = windows.tukey(2*half_width, ns)
    np.testing.assert_allclose(bandpass_window(1000, ifmax, th, ns), expected)


@pytest.mark.parametrize("ns", [0, -1])
def test_rectangular_window(ns):
    win = bandpass_window(256, 16, 0.5, ns=ns)
    np.testing.assert_array_equal(np.flatnonzero(win), np.arange(7, 25))
    assert np.all(win[7:25] == 1)


def test_taper_flattens_as_ns_decreases():
    tukey = bandpass_window(1000, 50, 0.6, ns=0.5)
    hann = bandpass_window(1000, 50, 0.6, ns=1)
    assert np.all(tukey >= hann - 1e-12)
    assert np.sum(tukey == 1) > np.sum(hann == 1)
    np.testing.assert_allclose(tukey[19:81], tukey[19:81][::-1])


def test_one_window_per_row():
    wins = bandpass_windows(256, np.array([16, 32, 16]), 0.5)
    np.testing.assert_array_equal(wins[0], wins[2])
    np.testing.assert_array_equal(wins[1], bandpass_window(256, 32, 0.5))


def test_out_of_range_window_reports_its_row():
    with pytest.raises(FilterBandOutOfRangeError) as err:
        bandpass_windows(100, np.array([10, 10, 70]), 0.6, first_row=10)
    assert err.value.row == 12


def test_synthetic_patterns():
    img = fringes((4, 40), 20)
    np.testing.assert_allclose(img[:, 4], np.sin(2*np.pi*5/20))
    bell = gaussian_bell((101, 101), amplitude=2., sigma=10., center=(51, 51))
    assert bell[50, 50] == pytest.approx(2.)
    assert bell.argmax() == 50*101 + 50
    prism = triangular_prism((10, 100), amplitude=30.)
    assert prism[3, 49] == pytest.approx(30.)
    assert prism[3, 0] == 0.

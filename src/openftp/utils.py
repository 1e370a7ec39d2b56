#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Jun 18 10:12:37 2024

This is a simple python package written to retrieve phase difference maps for a pair of fringe
images using Fourier Transform Profilometry.

These python codes can be used for non-profit academic research only. They are
distributed under the terms of the GNU general public license v3.

Anyone finding the python codes useful is kindly asked to cite:

# [1] M. Takeda and K. Mutoh. Fourier transform profilometry for the automatic measurement of
3-D object shapes. Applied Optics, 22(24):3977-3982, 1983.
# [2] A. Maurel, P. Cobelli, V. Pagneux and P. Petitjeans. Experimental and theoretical
inspection of the phase-to-height relation in Fourier transform profilometry. Applied Optics,
48(2):380-392, 2009.
"""
import numpy as np
from scipy.signal import windows

from openftp.errors import DegenerateCarrierError, FilterBandOutOfRangeError

# first bin of the spectrum searched for the carrier, lower ones being polluted by the
# background illumination
FIRST_BIN = 9
NoneType = type(None)


###############################################################################
# %% Usefull functions
def round_half_up(value):
    """ Rounding of positive values, halves being rounded away from zero"""
    return int(np.floor(value + 0.5))


def find_carriers(fft_rows, first_bin=FIRST_BIN):
    """ Locate, for each row of fft_rows (spectra of the rows of an image), the bin of the
    highest peak of its modulus among bins [first_bin, cols//2). The first failing row raises a
    DegenerateCarrierError: either the peak sits on first_bin, meaning the spectrum simply
    decreases from the null frequency, or the peak does not emerge from round-off noise (flat
    row)."""
    assert_array(fft_rows)
    assert isinstance(first_bin, (int, np.integer))
    assert first_bin >= 1

    fft_abs = np.abs(np.atleast_2d(fft_rows))
    last_bin = fft_abs.shape[1]//2
    if last_bin <= first_bin:
        raise DegenerateCarrierError(0, f"Rows of {fft_abs.shape[1]} pixels are too short to "
                                        f"search a carrier beyond bin {first_bin}.")

    searched = fft_abs[:, first_bin:last_bin]
    imax = np.argmax(searched, axis=1)
    peak = searched[np.arange(searched.shape[0]), imax]
    noise_floor = np.sqrt(np.finfo(float).eps)*fft_abs.max(axis=1)
    degenerate = (imax == 0) | (peak <= noise_floor)
    if np.any(degenerate):
        raise DegenerateCarrierError(int(np.flatnonzero(degenerate)[0]))
    return imax + first_bin


def find_carrier(fft_row, first_bin=FIRST_BIN):
    """ Carrier bin of a single row spectrum"""
    assert_array(fft_row)
    assert fft_row.ndim == 1
    return int(find_carriers(fft_row, first_bin=first_bin)[0])


def filter_band(ifmax, th, cols, row=0):
    """ Return the band [start, stop) occupied by the filter centred on carrier bin ifmax. Its
    half width is round((ifmax + 1)*th), ifmax + 1 being the index of the carrier when bins are
    counted from 1. The width is therefore even."""
    assert isinstance(ifmax, (int, np.integer))
    assert isinstance(th, (int, float, np.generic))
    assert th > 0

    half_width = round_half_up((ifmax + 1)*th)
    start, stop = int(ifmax - half_width), int(ifmax + half_width)
    if half_width == 0 or start < 0 or stop > cols:
        raise FilterBandOutOfRangeError(row, start, stop, cols)
    return start, stop


def bandpass_window(cols, ifmax, th, ns=1, row=0):
    """ Bandpass filter of length cols: a Tukey window of taper fraction ns covering the band
    returned by filter_band, zero elsewhere. ns <= 0 gives a rectangular window, ns >= 1 a Hann
    (gaussian-like) one."""
    assert isinstance(cols, (int, np.integer))
    assert isinstance(ns, (int, float, np.generic))

    start, stop = filter_band(ifmax, th, cols, row=row)
    win = np.zeros(cols)
    win[start:stop] = windows.tukey(stop - start, alpha=ns)
    return win


def bandpass_windows(cols, carriers, th, ns=1, first_row=0):
    """ One bandpass filter per row, for the given array of carrier bins. Windows are built once
    per distinct carrier."""
    assert_array(carriers)
    assert carriers.ndim == 1

    wins = np.zeros([len(carriers), cols])
    for ifmax in np.unique(carriers):
        rows = np.flatnonzero(carriers == ifmax)
        wins[rows, :] = bandpass_window(cols, int(ifmax), th, ns, row=first_row + int(rows[0]))
    return wins

###############################################################################


# %% Synthetic fringe patterns
def pixel_grid(shape):
    """ Pixel coordinates, starting at 1, of an image of given shape"""
    assert isinstance(shape, (tuple, list)) and len(shape) == 2
    return np.meshgrid(np.arange(1, shape[1] + 1), np.arange(1, shape[0] + 1))


def fringes(shape, period, phase=None):
    """ Vertical sinusoidal fringes of given period [px], i.e. sin(k*x + phase) with
    k = 2*pi/period. A phase map of the same shape can be imposed."""
    assert isinstance(period, (int, float, np.generic))
    assert period > 0
    assert isinstance(phase, (NoneType, np.ndarray, int, float, np.generic))

    px_x, __ = pixel_grid(shape)
    if phase is None:
        phase = 0
    return np.sin(2*np.pi/period*px_x + phase)


def gaussian_bell(shape, amplitude=40., sigma=150., center=None):
    """ Gaussian bell of given amplitude and standard deviation [px], centred on
    center = (x, y), by default on the middle of the image"""
    assert isinstance(sigma, (int, float, np.generic))
    assert sigma > 0

    px_x, px_y = pixel_grid(shape)
    if center is None:
        center = (shape[1]/2, shape[0]/2)
    return amplitude*np.exp(-((px_x - center[0])**2 + (px_y - center[1])**2)/(2*sigma**2))


def triangular_prism(shape, amplitude=30.):
    """ Triangular prism along y, peaking at the middle column of the image"""
    px_x, __ = pixel_grid(shape)
    cols = shape[1]
    return amplitude*np.maximum(0, 1 - np.abs(px_x - cols/2)/(cols/4))


# %% assertion checks
def assert_array(array):
    """ check assertion for array """
    if isinstance(array, list):
        for elem_of_list in array:
            assert_array(elem_of_list)
    else:
        assert isinstance(array, np.ndarray)
        assert isinstance(array.item(0), (int, float, complex, np.generic, np.complexfloating))


def assert_image(img):
    """ check assertion for image """
    assert_array(img)
    assert img.ndim == 2
    assert not np.iscomplexobj(img)

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


class FTPError(Exception):
    """ Base class of the errors raised while recovering a phase difference map"""


class ShapeMismatchError(FTPError, ValueError):
    """ Raised when the deformed and the reference images do not share the same shape"""

    def __init__(self, shape_def, shape_ref):
        self.shape_def = tuple(shape_def)
        self.shape_ref = tuple(shape_ref)
        super().__init__(f"Deformed image has shape {self.shape_def} while reference image has "
                         f"shape {self.shape_ref}.")


class DegenerateCarrierError(FTPError, ValueError):
    """ Raised when no carrier frequency can be found in a row of the reference image, i.e. the
    maximum of its spectrum is located at the very first searched bin (or the row carries no
    fringe at all)."""

    def __init__(self, row, message=None):
        self.row = row
        self.detail = message
        if message is None:
            message = (f"Problem with analysis of row {row}: max is located at null frequency "
                       "in FFT.")
        super().__init__(message)


class FilterBandOutOfRangeError(FTPError, ValueError):
    """ Raised when the band [start, stop) of the bandpass filter does not fit in [0, cols)"""

    def __init__(self, row, start, stop, cols):
        self.row = row
        self.start = start
        self.stop = stop
        self.cols = cols
        super().__init__(f"Filter band [{start}, {stop}) of row {row} does not fit in "
                         f"[0, {cols}); reduce the filter width.")


class ReferenceColumnError(FTPError, IndexError):
    """ Raised when the column used for the cross-row unwrapping lies outside the images"""

    def __init__(self, col_ref, cols):
        self.col_ref = col_ref
        self.cols = cols
        super().__init__(f"Reference column {col_ref} is out of range for images with {cols} "
                         "columns.")

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

# %% Required Libraries
import numpy as np
from numpy import ma
from skimage.restoration import unwrap_phase

from openftp.errors import ReferenceColumnError


# %% Class phase
class Phase():
    """ Phase is a class that helps manipulate phase maps. This class has three attributes:\n
        carriers: carrier bins of the rows along which phase has been extracted\n
        data: extracted phase (numpy array)\n
        shape: shape of the numpy array collecting the phase modulation"""

    carriers = None
    data = None
    shape = None

    def __init__(self, phase, carriers=None):
        """ Class constructor """
        assert isinstance(phase, np.ndarray)
        assert phase.ndim == 2
        if carriers is not None:
            assert isinstance(carriers, np.ndarray)
            assert carriers.shape == (phase.shape[0],)
        self.carriers = carriers
        self.data = phase
        self.shape = phase.shape

    def __sub__(self, other):
        """Note that - returns a numpy array, not a Phase class"""
        assert isinstance(other, Phase)
        assert other.shape == self.shape
        return self.data - other.data

    def copy(self):
        """ Method that copies a given Phase class"""
        carriers = None if self.carriers is None else self.carriers.copy()
        return Phase(self.data.copy(), carriers)

    def cross_unwrap(self, col_ref=None):
        """ Method that removes the 2pi jumps between rows that have been unwrapped
        independently. Column col_ref (middle column by default) is unwrapped along the rows and
        the resulting correction is applied to the whole rows."""
        if col_ref is None:
            col_ref = self.shape[1]//2
        assert isinstance(col_ref, (int, np.integer))
        if not 0 <= col_ref < self.shape[1]:
            raise ReferenceColumnError(col_ref, self.shape[1])

        col = self.data[:, col_ref]
        self.add_corr((np.unwrap(col) - col).reshape(-1, 1))

    def unwrap(self, roi=None):
        """ Method that unwraps the phase map in 2D. A region of interest (True for the pixels of
        interest) can be provided to reduce computing cost, pixels outside of it are set to 0."""
        if roi is None:
            roi = np.ones(self.data.shape, dtype='bool')
        else:
            assert isinstance(roi, np.ndarray)
            assert roi.dtype == bool
            assert roi.shape == self.shape
        phi = ma.masked_array(self.data, ~roi)
        self.data = np.array(ma.filled(unwrap_phase(phi), 0))

    def add_corr(self, corr):
        """ Method that adds a correction to the phase map: a scalar, a column of per-row values
        or a full map."""
        if np.isscalar(corr):
            corr = np.array(corr, dtype=float)
        assert isinstance(corr, np.ndarray)
        assert corr.shape in (self.shape, (self.shape[0], 1)) or corr.size == 1
        self.data = self.data + corr

    def profile(self, row):
        """ Method that returns the phase along a given row"""
        assert isinstance(row, (int, np.integer))
        return self.data[row, :].copy()

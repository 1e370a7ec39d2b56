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
import logging as lg
from concurrent.futures import ThreadPoolExecutor
import numpy as np

from openftp.errors import (ShapeMismatchError, DegenerateCarrierError,
                            ReferenceColumnError)
from openftp.utils import FIRST_BIN, NoneType
from openftp.utils import find_carriers, bandpass_windows, assert_image
from openftp.phase import Phase

# logger shared by all the instances, each of them deciding on its own whether it reports
LOGGER = lg.getLogger("OpenFTP")
LOGGER.setLevel("INFO")
if not LOGGER.hasHandlers():
    formatter = lg.Formatter("%(asctime)s %(levelname)-8s %(name)7s.%(funcName)-11s: %(message)s")
    handler = lg.StreamHandler()
    handler.setFormatter(formatter)
    LOGGER.addHandler(handler)


# %% Class FTP
class OpenFTP():
    """ This Class gathers the steps of the Fourier Transform Profilometry technique: each row of
    a reference and of a deformed fringe image is Fourier transformed, the fundamental
    frequency of the reference fringes is isolated with a Tukey window, both filtered spectra
    are transformed back and the argument of the resulting signals is unwrapped, first along
    the rows, then across them through a reference column. Its attributes are
        th: width of the window, as a fraction of the carrier bin.
        ns: taper fraction of the window (1 - gaussian-like, <1 - Tukey, <=0 - rectangular).
        col_ref: column used for the cross-row unwrapping, None meaning the middle one.
        first_bin: first bin of the spectrum searched for the carrier.
        roi: optional array of booleans restricting the 2d unwrapping, 1 or True
             corresponding to the pixel of interest.
        options: this dictionary defines how the phase is unwrapped ('rows' or '2d'), the
                 number of threads filtering the rows (n_jobs) and the verbosity.
    An instance is never modified by the computations, so it can be shared between threads."""

    th = None
    ns = None
    col_ref = None
    first_bin = None
    roi = None

    # %% Class constructor
    def __init__(self, th=0.6, ns=1,
                 col_ref=None,
                 first_bin=FIRST_BIN,
                 roi=None,
                 unwrap='rows',
                 n_jobs=1,
                 verbose=False):

        # << ------ check if input variables are correct
        assert isinstance(th, (int, float, np.generic))
        assert th > 0
        assert isinstance(ns, (int, float, np.generic))
        assert isinstance(col_ref, (NoneType, int, np.integer))
        assert isinstance(first_bin, (int, np.integer))
        assert first_bin >= 1
        assert isinstance(roi, (NoneType, np.ndarray))
        if isinstance(roi, np.ndarray):
            assert roi.dtype == bool
        assert unwrap in ('rows', '2d')
        assert isinstance(n_jobs, (int, np.integer))
        assert n_jobs >= 1
        assert isinstance(verbose, bool)
        # ------ >>

        self.th = th
        self.ns = ns
        self.col_ref = col_ref
        self.first_bin = first_bin
        self.roi = roi
        self.options = {'unwrap': unwrap,
                        'n_jobs': n_jobs,
                        'verbose': verbose}

        self.logger = LOGGER

    # %% Some usefull functions
    def copy(self):
        """ Method that copies an OpenFTP class."""
        return OpenFTP(th=self.th, ns=self.ns, col_ref=self.col_ref, first_bin=self.first_bin,
                       roi=self.roi,
                       unwrap=self.options['unwrap'],
                       n_jobs=self.options['n_jobs'],
                       verbose=self.options['verbose'])

    def check_images(self, img_def, img_ref):
        """ Method that checks that a pair of images can be processed and returns the column
        used for the cross-row unwrapping."""
        assert_image(img_def)
        assert_image(img_ref)
        if img_def.shape != img_ref.shape:
            raise ShapeMismatchError(img_def.shape, img_ref.shape)
        if self.roi is not None and self.roi.shape != img_ref.shape:
            raise ShapeMismatchError(self.roi.shape, img_ref.shape)

        cols = img_ref.shape[1]
        col_ref = cols//2 if self.col_ref is None else self.col_ref
        if not 0 <= col_ref < cols:
            raise ReferenceColumnError(col_ref, cols)
        return col_ref

    # %% FTP core functions
    def carriers(self, img_ref):
        """ Method that returns the carrier bin of each row of the reference image."""
        assert_image(img_ref)
        return find_carriers(np.fft.fft(img_ref, axis=1), first_bin=self.first_bin)

    def filter_rows(self, img_def, img_ref, first_row=0):
        """ Method that filters rows of both images around the carrier of the reference ones.
        It returns the carriers and the complex signals obtained after the inverse Fourier
        transform of the filtered spectra, for the deformed and the reference images.
        first_row is the index of the first given row in the whole image (error reporting)."""
        fft_ref = np.fft.fft(img_ref, axis=1)
        fft_def = np.fft.fft(img_def, axis=1)

        try:
            carriers = find_carriers(fft_ref, first_bin=self.first_bin)
        except DegenerateCarrierError as err:
            raise DegenerateCarrierError(first_row + err.row, err.detail) from err
        wins = bandpass_windows(img_ref.shape[1], carriers, self.th, self.ns,
                                first_row=first_row)

        return carriers, np.fft.ifft(fft_def*wins, axis=1), np.fft.ifft(fft_ref*wins, axis=1)

    def compute_signals(self, img_def, img_ref):
        """ Method that filters all the rows, possibly using several threads (rows are
        independent). All the rows are processed before returning."""
        n_jobs = min(self.options['n_jobs'], img_ref.shape[0])
        if n_jobs == 1:
            return self.filter_rows(img_def, img_ref)

        bounds = np.linspace(0, img_ref.shape[0], n_jobs + 1).astype(int)
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            results = list(executor.map(lambda start, stop:
                                        self.filter_rows(img_def[start:stop], img_ref[start:stop],
                                                         first_row=int(start)),
                                        bounds[:-1], bounds[1:]))
        return tuple(np.concatenate([res[i] for res in results]) for i in range(3))

    def compute_phases(self, img_def, img_ref):
        """ Method that returns the unwrapped phases (Phase classes) of the deformed and of the
        reference images. Rows are unwrapped independently then stitched together through the
        reference column."""
        col_ref = self.check_images(img_def, img_ref)
        img_def = np.asarray(img_def, dtype=float)
        img_ref = np.asarray(img_ref, dtype=float)

        self.info("Computing the phase modulations of %d rows", img_ref.shape[0])
        carriers, sig_def, sig_ref = self.compute_signals(img_def, img_ref)
        self.log_carriers(carriers)

        phi = Phase(np.unwrap(np.angle(sig_def), axis=1), carriers)
        phi_0 = Phase(np.unwrap(np.angle(sig_ref), axis=1), carriers)

        self.info("Cross-row unwrapping through column %d", col_ref)
        phi.cross_unwrap(col_ref)
        phi_0.cross_unwrap(col_ref)
        return phi, phi_0

    def compute_phase(self, img, img_ref):
        """ Method that returns the unwrapped phase (Phase class) of a single image, filtered
        with the carriers of the reference image."""
        phi, __ = self.compute_phases(img, img_ref)
        return phi

    def compute_wrapped_difference(self, img_def, img_ref):
        """ Method that returns the phase difference wrapped into (-pi, pi], computed pixel wise
        from the filtered signals, as a Phase class."""
        self.check_images(img_def, img_ref)
        img_def = np.asarray(img_def, dtype=float)
        img_ref = np.asarray(img_ref, dtype=float)

        carriers, sig_def, sig_ref = self.compute_signals(img_def, img_ref)
        self.log_carriers(carriers)
        return Phase(np.angle(sig_def*np.conj(sig_ref)), carriers)

    def compute_phase_difference(self, img_def, img_ref):
        """ Method that returns the phase difference map [rad] between the deformed image and the
        reference one (deformed minus reference)."""
        if self.options['unwrap'] == '2d':
            dphi = self.compute_wrapped_difference(img_def, img_ref)
            self.info("2D unwrapping of the phase difference")
            dphi.unwrap(self.roi)
            return dphi.data

        phi, phi_0 = self.compute_phases(img_def, img_ref)
        return phi - phi_0

    def info(self, msg, *args):
        """ Method that reports progress, only for verbose instances."""
        if self.options['verbose']:
            self.logger.info(msg, *args, stacklevel=2)

    def log_carriers(self, carriers):
        """ Method that reports the carrier bins found in the reference image."""
        self.info("Carrier bins from %d to %d (median %d)",
                  carriers.min(), carriers.max(), int(np.median(carriers)))
        if carriers.min() != carriers.max():
            self.logger.warning("Carriers are not uniform across rows: windows differ between "
                                "rows")


# %% Basic function
def ftp_reconstruction(img_def, img_ref, th=0.6, ns=1, col_ref=None):
    """ Phase difference map between the deformed image img_def and the reference image img_ref.
    th is the width of the window and ns its 'gaussianness' (1 for gaussian, <1 for Tukey)."""
    return OpenFTP(th=th, ns=ns, col_ref=col_ref).compute_phase_difference(img_def, img_ref)

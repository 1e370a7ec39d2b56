#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fourier Transform Profilometry: phase difference maps from a pair of fringe images.

These python codes can be used for non-profit academic research only. They are
distributed under the terms of the GNU general public license v3.
"""
from openftp.openftp import OpenFTP, ftp_reconstruction
from openftp.phase import Phase
from openftp.errors import (FTPError, ShapeMismatchError, DegenerateCarrierError,
                            FilterBandOutOfRangeError, ReferenceColumnError)

__all__ = ['OpenFTP', 'ftp_reconstruction', 'Phase', 'FTPError', 'ShapeMismatchError',
           'DegenerateCarrierError', 'FilterBandOutOfRangeError', 'ReferenceColumnError']

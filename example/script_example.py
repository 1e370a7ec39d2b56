#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Jun 18 10:12:37 2024

This is a simple python script showing how to retrieve a phase difference map, and then a height
map, from a pair of synthetic fringe images using Fourier Transform Profilometry.

These python codes can be used for non-profit academic research only. They are
distributed under the terms of the GNU general public license v3.

Anyone finding the python codes useful is kindly asked to cite:

# [1] M. Takeda and K. Mutoh. Fourier transform profilometry for the automatic measurement of
3-D object shapes. Applied Optics, 22(24):3977-3982, 1983.
# [2] A. Maurel, P. Cobelli, V. Pagneux and P. Petitjeans. Experimental and theoretical
inspection of the phase-to-height relation in Fourier transform profilometry. Applied Optics,
48(2):380-392, 2009.
"""

# %% Loading Libraries

# regular librairies
import numpy as np
import matplotlib.pyplot as plt

# FTP library
from openftp import OpenFTP
from openftp.utils import fringes, gaussian_bell, triangular_prism

# Synthetic fringes
shape = (1000, 1000)
period = 20
img_ref = fringes(shape, period)

# Filtering parameters: width of the window and 'gaussianness' (1 - Gaussian, <1 - Tukey)
my_ftp = OpenFTP(th=0.6, ns=1, verbose=True)

# Phase to height parameters for a parallel axis optical setup (typical of water wave
# experiments, they do not mean much for synthetic images)
w = 1500    # periodicity of the fringes
L = 2       # distance camera/projector - surface
D = 0.5     # distance camera - projector

# %% Example 1: Gaussian bell
bell = gaussian_bell(shape, amplitude=40, sigma=150, center=(500, 500))
img_bell = fringes(shape, period, phase=bell)

phi_bell, phi_0 = my_ftp.compute_phases(img_bell, img_ref)
dphase_bell = phi_bell - phi_0
height_bell = L*dphase_bell/(dphase_bell - w*D)

# %% Example 2: Triangular prism
prism = triangular_prism(shape, amplitude=30)
img_prism = fringes(shape, period, phase=prism)

phi_prism, phi_0 = my_ftp.compute_phases(img_prism, img_ref)
dphase_prism = phi_prism - phi_0
height_prism = L*dphase_prism/(dphase_prism - w*D)

# %% Figures
plt.close('all')
for name, imposed, phi, dphase, height in (
        ('Gaussian', bell, phi_bell, dphase_bell, height_bell),
        ('Prism', prism, phi_prism, dphase_prism, height_prism)):
    fig, axs = plt.subplots(2, 2, figsize=(9, 9))
    axs[0, 0].imshow(imposed)
    axs[0, 0].set_title(f"Imposed phase difference ({name})")
    axs[0, 1].imshow(dphase)
    axs[0, 1].set_title(f"Recovered phase difference ({name})")
    axs[1, 0].plot(phi.profile(500) - phi_0.profile(500), label='Recovered')
    axs[1, 0].plot(imposed[500, :], '--', label='Imposed')
    axs[1, 0].set_xlabel("X")
    axs[1, 0].set_ylabel("Phase")
    axs[1, 0].legend(loc='lower right')
    axs[1, 1].imshow(height)
    axs[1, 1].set_title(f"Recovered height ({name})")
    plt.show(block=False)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Jun 20 09:41:02 2024

This is a simple python script retrieving the height of a boat wake from experimental fringe
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

# %% Loading Libraries

# regular librairies
import numpy as np
from PIL import Image
import matplotlib.pyplot as plt

# FTP library
from openftp import ftp_reconstruction

# Optical setup
L = 1.88        # [m] distance camera/projector - surface
D = 0.45        # [m] distance camera - projector

# Pixel size
T10 = 148       # number of pixels per 10 wavelengths (carrier frequency)
cm = 10         # how many centimeters for...
pxs = 346.67    # ...how many pixels?
px_size = cm/pxs/100

# Fringes parameters
period = T10*px_size/10
w = 2*np.pi/period

# Filtering parameters
th = 0.6
ns = 1

# Loading images: reference fringes, background (gray) and deformed fringes
img_ref_b = np.array(Image.open("ref.tif"), dtype=float)
img_gray = np.array(Image.open("gray.tif"), dtype=float)
img_def_b = np.array(Image.open("def.tif"), dtype=float)

# Background subtraction
img_ref = img_ref_b - img_gray
img_def = img_def_b - img_gray

# Phase difference and height
dphase = ftp_reconstruction(img_def, img_ref, th=th, ns=ns)
dphase[np.isnan(dphase)] = 0
eta = L*dphase/(dphase - w*D)

# %% Figures
x_meter = np.arange(1, img_gray.shape[1] + 1)*px_size
y_meter = np.arange(1, img_gray.shape[0] + 1)*px_size

fig, ax = plt.subplots()
im = ax.pcolormesh(x_meter, y_meter, eta, cmap='RdBu_r', vmin=-8e-3, vmax=8e-3,
                   shading='auto')
ax.set_aspect('equal')
ax.set_xlabel("x [m]")
ax.set_ylabel("y [m]")
ax.set_title("Recovered height profile")
plt.colorbar(im, ax=ax, label="Height [m]")
plt.show()

"""
Normalised difference indices of TOA reflectance pixels.

Pixels are band-first, so ``pixel[band]`` selects one band of a single pixel
or of a whole block. An index is 0 where its denominator is exactly zero.
"""
import numpy as np

from mswater.bands import WorldView3Band


def compute_index(pixel, band_a, band_b):
    """(a - b) / (a + b), or 0 where a + b == 0."""
    a = np.asarray(pixel[band_a], dtype=np.float32)
    b = np.asarray(pixel[band_b], dtype=np.float32)
    denom = a + b
    zero = denom == 0
    with np.errstate(divide='ignore', invalid='ignore'):
        index = np.where(zero, np.float32(0), (a - b) / np.where(zero, np.float32(1), denom))
    if index.ndim == 0:
        return float(index)
    return index


def compute_ndvi(pixel):
    return compute_index(pixel, WorldView3Band.RED, WorldView3Band.NIR2)


def compute_ndwi(pixel):
    return compute_index(pixel, WorldView3Band.BLUE, WorldView3Band.NIR1)


def compute_ndwi2(pixel):
    """Coastal/NIR2 variant. Both this and compute_ndwi are sometimes listed as "NDWI"."""
    return compute_index(pixel, WorldView3Band.COASTAL, WorldView3Band.NIR2)

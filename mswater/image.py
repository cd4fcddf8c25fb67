"""
Masked multi-band pixels.

Pixel data is band-first: one pixel is an array of shape (bands,), a block of
pixels is (bands, rows, cols). Validity is a single flag per pixel covering all
bands jointly, held as a boolean array with the spatial shape of the data
(a scalar for one pixel).
"""
from collections import namedtuple

import numpy as np

MaskedPixels = namedtuple('MaskedPixels', ['data', 'valid'])


def create_mask(raw, nodata=0):
    """
    Pair raw pixels with a validity flag.

    A pixel is invalid when every band holds the nodata value, which is how
    the sensor product fills the area outside the image footprint.
    """
    raw = np.asarray(raw)
    valid = np.any(raw != nodata, axis=0)
    return MaskedPixels(raw, valid)


def apply_mask(values, valid, nodata_value):
    """Replace every invalid position of a single-band array by nodata_value."""
    values = np.array(values, copy=True)
    values[~np.asarray(valid, dtype=bool)] = nodata_value
    return values

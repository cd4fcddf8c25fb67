"""
Label TOA reflectance pixels as water, land or nodata.
"""
import numpy as np

from mswater.constants import LAND, NODATA, WATER, WATER_THRESHOLD
from mswater.indices import compute_ndwi


def classify(pixels, threshold=WATER_THRESHOLD):
    """
    Produce a water classification from masked TOA reflectance pixels.

    Extremely simple way to look for water: NDWI above the threshold.
    It does not work well; the threshold is provisional until the method has
    been tested on more scenes.

    :param pixels: MaskedPixels of reflectance, band-first
    :param threshold: NDWI value that must be exceeded to label water
    :return: uint8 labels with the spatial shape of the pixels
             (a scalar label for a single pixel)
    """
    ndwi = np.asarray(compute_ndwi(pixels.data), dtype=np.float32)
    valid = np.asarray(pixels.valid, dtype=bool)

    # compare in float32 so the threshold boundary is not shifted by promotion
    labels = np.where(ndwi > np.float32(threshold), np.uint8(WATER), np.uint8(LAND))
    labels = np.where(valid, labels, np.uint8(NODATA)).astype(np.uint8)

    if labels.ndim == 0:
        return int(labels)
    return labels

"""
Produce a water detection layer for a WorldView-3 scene.

The calibration metadata is read and validated first; only then are image
blocks converted to TOA reflectance and classified. Each block is independent
of the others. A failure part way through removes the incomplete output.
"""
import logging
import os

import numpy as np

from mswater.classifier import classify
from mswater.constants import NODATA, WATER_THRESHOLD, WORLDVIEW_MAX_DN
from mswater.image import apply_mask
from mswater.metadata import load_worldview3_metadata
from mswater.raster_io import (create_output, iter_windows, open_worldview3_image, output_profile,
                               read_masked_block)
from mswater.toa import WorldView3Toa

_LOG = logging.getLogger(__name__)


def compute_toa_block(raw_pixels, metadata):
    return WorldView3Toa(metadata)(raw_pixels)


def classify_block(raw_pixels, metadata, threshold=WATER_THRESHOLD):
    """Raw masked pixels to uint8 labels, with NODATA wherever the input is invalid."""
    labels = classify(compute_toa_block(raw_pixels, metadata), threshold)
    return apply_mask(labels, raw_pixels.valid, NODATA)


def count_out_of_range(raw_pixels):
    """Number of raw counts in valid pixels above the sensor's 11-bit range."""
    return int(np.count_nonzero((raw_pixels.data > WORLDVIEW_MAX_DN) & raw_pixels.valid))


def _remove_partial_output(output_path):
    if os.path.exists(output_path):
        _LOG.warning('Removing incomplete output %s', output_path)
        os.remove(output_path)


def detect_water_worldview3(image_files, output_path, threshold=WATER_THRESHOLD,
                            creation_options=None, debug=False):
    """
    Classify a WorldView-3 scene into water, land and nodata.

    :param image_files: candidate input paths, must include the .tif image and the .IMD metadata
    :param output_path: GeoTIFF to write, carrying the input georeference
    :param threshold: NDWI water threshold
    :param creation_options: extra GeoTIFF creation options for the output
    :param debug: log the loaded metadata
    :return: output_path
    """
    dataset, georef = open_worldview3_image(image_files)
    with dataset:
        metadata = load_worldview3_metadata(image_files)
        if debug:
            _LOG.info('Loaded metadata:\n%s', metadata.describe())

        profile = output_profile(georef, dataset.width, dataset.height, creation_options)

        _LOG.info('Classifying %dx%d pixels with NDWI threshold %s', dataset.width, dataset.height, threshold)
        out_of_range = 0
        dst = create_output(output_path, profile)
        try:
            with dst:
                for i, window in enumerate(iter_windows(dataset)):
                    raw = read_masked_block(dataset, window)
                    out_of_range += count_out_of_range(raw)
                    labels = classify_block(raw, metadata, threshold)
                    dst.write(labels, 1, window=window)
                    _LOG.debug('Block %d done: %s', i, window)
        except Exception:
            _remove_partial_output(output_path)
            raise

    if out_of_range:
        _LOG.warning('%d raw counts exceed the 11-bit maximum of %d, reflectance may be unreliable',
                     out_of_range, WORLDVIEW_MAX_DN)
    _LOG.info('Wrote water detection layer %s', output_path)
    return output_path

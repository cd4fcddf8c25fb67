"""
Raster input and output through rasterio.

Reading, block layout and georeferencing belong to rasterio/GDAL; this module
only adapts them to masked band-first pixel blocks and single-band label
output.
"""
import logging
from collections import namedtuple

import rasterio
from affine import Affine
from rasterio.errors import RasterioIOError

from mswater.constants import NODATA, NUM_WORLDVIEW_BANDS
from mswater.errors import (GeoReferenceReadError, ImageNotFoundError, RasterReadError, RasterWriteError,
                            SensorFormatError)
from mswater.image import create_mask

_LOG = logging.getLogger(__name__)

IMAGE_EXTENSION = '.tif'

GeoReference = namedtuple('GeoReference', ['crs', 'transform'])


def find_file_in_list(input_paths, extension):
    """First candidate path ending with the extension (case-insensitive), or None."""
    extension = extension.lower()
    for path in input_paths:
        if str(path).lower().endswith(extension):
            return path
    return None


def read_georeference(dataset):
    """Geographic reference of an open dataset."""
    if dataset.crs is None or dataset.transform == Affine.identity():
        raise GeoReferenceReadError('Failed to read georeference from image %s' % dataset.name)
    return GeoReference(dataset.crs, dataset.transform)


def open_worldview3_image(input_paths):
    """
    Locate and open the WorldView-3 multispectral image among the candidates.

    The 8 bands are stored in one image, in the order Coastal, Blue, Green,
    Yellow, Red, Red-Edge, Near-IR1, Near-IR2. The caller owns the returned
    dataset and must close it.

    :return: (open rasterio dataset, GeoReference)
    """
    image_path = find_file_in_list(input_paths, IMAGE_EXTENSION)
    if image_path is None:
        raise ImageNotFoundError('WorldView image file', input_paths)

    _LOG.info('Opening image %s', image_path)
    try:
        dataset = rasterio.open(image_path)
    except RasterioIOError as e:
        raise RasterReadError('Cannot open image %s: %s' % (image_path, e)) from e
    try:
        if dataset.count != NUM_WORLDVIEW_BANDS:
            raise SensorFormatError('Expected %d bands in %s, found %d'
                                    % (NUM_WORLDVIEW_BANDS, image_path, dataset.count))
        georef = read_georeference(dataset)
    except Exception:
        dataset.close()
        raise

    if dataset.nodata is None:
        _LOG.warning('%s declares no nodata value, treating all-zero pixels as nodata', image_path)
    return dataset, georef


def iter_windows(dataset):
    """The dataset's native block windows."""
    for _, window in dataset.block_windows(1):
        yield window


def read_masked_block(dataset, window=None):
    """Read a band-first block of raw counts paired with pixel validity."""
    try:
        raw = dataset.read(window=window)
    except RasterioIOError as e:
        raise RasterReadError('Cannot read %s from %s: %s' % (window, dataset.name, e)) from e
    nodata = dataset.nodata if dataset.nodata is not None else 0
    return create_mask(raw, nodata)


def output_profile(georef, width, height, creation_options=None):
    """Profile of a single band uint8 label raster."""
    profile = {
        'driver': 'GTiff',
        'dtype': 'uint8',
        'count': 1,
        'width': width,
        'height': height,
        'crs': georef.crs,
        'transform': georef.transform,
        'nodata': NODATA,
    }
    profile.update(creation_options or {})
    return profile


def create_output(output_path, profile):
    """Open the output raster for writing. The caller must close it."""
    try:
        return rasterio.open(output_path, 'w', **profile)
    except RasterioIOError as e:
        raise RasterWriteError('Cannot create %s: %s' % (output_path, e)) from e

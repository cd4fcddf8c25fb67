import numpy as np
import pytest
from rasterio.errors import RasterioIOError

from mswater.constants import NODATA
from mswater.errors import RasterReadError
from mswater.image import apply_mask, create_mask
from mswater.raster_io import find_file_in_list, GeoReference, output_profile, read_masked_block
from mswater.raster_io import open_worldview3_image


def test_find_file_in_list():
    paths = ['scene.IMD', 'scene.TIF', 'other.tif']
    assert find_file_in_list(paths, '.tif') == 'scene.TIF'
    assert find_file_in_list(paths, '.imd') == 'scene.IMD'
    assert find_file_in_list(paths, '.xml') is None
    assert find_file_in_list([], '.tif') is None


def test_create_mask_needs_all_bands_at_nodata():
    raw = np.zeros((3, 1, 3), dtype=np.uint16)
    raw[0, 0, 1] = 5
    raw[:, 0, 2] = 9

    pixels = create_mask(raw)
    np.testing.assert_array_equal(pixels.valid, [[False, True, True]])

    pixels = create_mask(raw, nodata=9)
    np.testing.assert_array_equal(pixels.valid, [[True, True, False]])


def test_single_pixel_mask():
    assert not create_mask(np.zeros(8)).valid
    assert create_mask(np.arange(8)).valid


def test_apply_mask():
    labels = np.array([[0, 1], [1, 0]], dtype=np.uint8)
    masked = apply_mask(labels, [[True, False], [True, True]], NODATA)
    np.testing.assert_array_equal(masked, [[0, NODATA], [1, 0]])
    np.testing.assert_array_equal(labels, [[0, 1], [1, 0]])


def test_output_profile():
    georef = GeoReference('EPSG:32610', None)
    profile = output_profile(georef, 10, 20, {'compress': 'lzw'})
    assert profile['count'] == 1
    assert profile['dtype'] == 'uint8'
    assert profile['nodata'] == NODATA
    assert (profile['width'], profile['height']) == (10, 20)
    assert profile['compress'] == 'lzw'


def test_read_masked_block(write_image, write_imd, scene_counts):
    dataset, georef = open_worldview3_image([write_imd(), write_image(scene_counts)])
    with dataset:
        pixels = read_masked_block(dataset)
    assert georef.crs.to_epsg() == 32610
    np.testing.assert_array_equal(pixels.data, scene_counts)
    np.testing.assert_array_equal(pixels.valid, [[True, True], [False, True]])


class _FailingDataset:
    name = 'broken.tif'
    nodata = 0

    def read(self, window=None):
        raise RasterioIOError('Read or write failed. broken.tif, band 1: IReadBlock failed')


def test_block_read_failure_is_wrapped():
    with pytest.raises(RasterReadError, match='broken.tif') as excinfo:
        read_masked_block(_FailingDataset())
    assert isinstance(excinfo.value.__cause__, RasterioIOError)

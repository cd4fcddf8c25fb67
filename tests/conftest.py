import numpy as np
import pytest
import rasterio
from affine import Affine

from mswater.bands import WORLDVIEW_GROUP_NAMES

GROUP_ORDER = sorted(WORLDVIEW_GROUP_NAMES, key=WORLDVIEW_GROUP_NAMES.get)

# absCalFactor = 0.01 * (band + 1), effectiveBandwidth = 0.05 for every band
ABS_CAL_FACTOR = [0.01 * (i + 1) for i in range(8)]
EFFECTIVE_BANDWIDTH = [0.05] * 8

# 2000-01-01 12:00 UT is the J2000 epoch, Earth-Sun distance 0.98330606 AU
FIRST_LINE_TIME = '2000-01-01T12:00:00.000000Z'
MEAN_SUN_EL = 90.0


def make_imd_lines(abs_cal_factor=ABS_CAL_FACTOR, effective_bandwidth=EFFECTIVE_BANDWIDTH,
                   mean_sun_el=MEAN_SUN_EL, first_line_time=FIRST_LINE_TIME):
    """Lines of a WorldView-3 .IMD file, trimmed to a realistic subset."""
    lines = [
        'version = "28.4";',
        'generationTime = 2016-10-24T01:27:21.000000Z;',
        'productOrderId = "058409463010_01_P001";',
        'numberOfLooks = 1;',
    ]
    for name, abs_cal, bandwidth in zip(GROUP_ORDER, abs_cal_factor, effective_bandwidth):
        lines += [
            'BEGIN_GROUP = %s' % name,
            '\tULLon = -122.10312500;',
            '\tabsCalFactor = %e;' % abs_cal,
            '\teffectiveBandwidth = %e;' % bandwidth,
            '\tTDILevel = 24;',
            'END_GROUP = %s' % name,
        ]
    lines += [
        'BEGIN_GROUP = IMAGE_1',
        '\tsatId = "WV03";',
        '\tfirstLineTime = %s;' % first_line_time,
        '\tmeanSunAz = 160.1;',
        '\tmeanSunEl = %s;' % mean_sun_el,
        '\tmeanOffNadirViewAngle = 18.2;',
        'END_GROUP = IMAGE_1',
        'BEGIN_GROUP = MAP_PROJECTED_PRODUCT',
        '\tearliestAcqTime = 2016-10-23T17:46:54.796950Z;',
        'END_GROUP = MAP_PROJECTED_PRODUCT',
        'END;',
    ]
    return lines


@pytest.fixture
def imd_lines():
    return make_imd_lines()


@pytest.fixture
def write_imd(tmp_path):
    def _write(lines=None, name='scene.IMD'):
        path = tmp_path / name
        path.write_text('\n'.join(make_imd_lines() if lines is None else lines) + '\n')
        return path
    return _write


@pytest.fixture
def write_image(tmp_path):
    """Write band-first uint16 counts as a georeferenced GeoTIFF."""
    def _write(data, name='scene.tif', crs='EPSG:32610',
               transform=Affine(2.0, 0.0, 500000.0, 0.0, -2.0, 4200000.0), **options):
        data = np.asarray(data, dtype=np.uint16)
        count, height, width = data.shape
        profile = dict(driver='GTiff', dtype='uint16', count=count, width=width, height=height, nodata=0)
        if crs is not None:
            profile.update(crs=crs, transform=transform)
        profile.update(options)
        path = tmp_path / name
        with rasterio.open(path, 'w', **profile) as dst:
            dst.write(data)
        return path
    return _write


@pytest.fixture
def scene_counts():
    """
    2x2 pixels of 8 bands.

    (0, 0) bright blue, dark NIR1: water
    (0, 1) dark blue, bright NIR1: land
    (1, 0) all zero: nodata
    (1, 1) vegetation-like: land
    """
    pixels = {
        (0, 0): [900, 1000, 800, 600, 400, 200, 100, 80],
        (0, 1): [250, 300, 350, 380, 400, 650, 800, 820],
        (1, 0): [0] * 8,
        (1, 1): [200, 220, 330, 250, 180, 700, 1200, 1250],
    }
    data = np.zeros((8, 2, 2), dtype=np.uint16)
    for (row, col), values in pixels.items():
        data[:, row, col] = values
    return data

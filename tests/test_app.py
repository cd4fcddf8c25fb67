"""
Command line interface
"""
import numpy as np
import rasterio
from click.testing import CliRunner

from mswater.constants import LAND, NODATA, WATER
from mswater.mswater_app import cli

from tests.conftest import make_imd_lines


def test_detect(write_image, write_imd, scene_counts, tmp_path):
    output = tmp_path / 'water.tif'
    result = CliRunner().invoke(cli, ['detect', str(write_image(scene_counts)), str(write_imd()),
                                      '--output', str(output)])

    assert result.exit_code == 0, result.output
    assert str(output) in result.output
    with rasterio.open(output) as dst:
        np.testing.assert_array_equal(dst.read(1), [[WATER, LAND], [NODATA, LAND]])


def test_threshold_option_overrides_config(write_image, write_imd, scene_counts, tmp_path):
    config = tmp_path / 'settings.yaml'
    config.write_text('water_threshold: 0.0\n')
    output = tmp_path / 'water.tif'

    result = CliRunner().invoke(cli, ['-v', 'detect', str(write_image(scene_counts)), str(write_imd()),
                                      '--output', str(output), '--config', str(config),
                                      '--threshold', '0.9', '--debug'])

    assert result.exit_code == 0, result.output
    with rasterio.open(output) as dst:
        np.testing.assert_array_equal(dst.read(1), [[LAND, LAND], [NODATA, LAND]])


def test_scene_error_is_reported(write_imd, tmp_path):
    result = CliRunner().invoke(cli, ['detect', str(write_imd()), '--output', str(tmp_path / 'water.tif')])

    assert result.exit_code == 1
    assert 'WorldView image file not found' in result.output


def test_show_metadata(write_imd):
    result = CliRunner().invoke(cli, ['show-metadata', str(write_imd())])

    assert result.exit_code == 0, result.output
    assert 'earth_sun_distance  0.98330' in result.output
    assert '2000-01-01T12:00:00.000000Z' in result.output


def test_show_metadata_incomplete(write_imd):
    lines = [line for line in make_imd_lines() if 'firstLineTime' not in line]
    result = CliRunner().invoke(cli, ['show-metadata', str(write_imd(lines))])

    assert result.exit_code == 1
    assert 'found 17 of 18' in result.output


def test_unreadable_image_is_reported(write_imd, tmp_path):
    image = tmp_path / 'scene.tif'
    image.write_bytes(b'this is not a GeoTIFF')
    output = tmp_path / 'water.tif'

    result = CliRunner().invoke(cli, ['detect', str(image), str(write_imd()), '--output', str(output)])

    assert result.exit_code == 1
    assert 'Cannot open image' in result.output
    assert not output.exists()

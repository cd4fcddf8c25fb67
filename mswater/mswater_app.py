"""
Command line entry point for water detection.

    mswater detect SCENE.tif SCENE.IMD --output water.tif
    mswater show-metadata SCENE.IMD
"""
import logging

import click

from mswater import __version__
from mswater.config import load_config
from mswater.detect import detect_water_worldview3
from mswater.errors import MsWaterError
from mswater.metadata import load_worldview3_metadata

_LOG = logging.getLogger(__name__)


def _init_logging(verbose):
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


@click.group()
@click.version_option(__version__)
@click.option('--verbose', '-v', count=True, help="Use multiple times for more verbosity")
def cli(verbose):
    _init_logging(verbose)


@cli.command(help="Classify a WorldView-3 scene into water, land and nodata.")
@click.argument('image_files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False), help="Output GeoTIFF")
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help="YAML settings file")
@click.option('--threshold', type=float, default=None, help="NDWI water threshold (overrides config)")
@click.option('--debug/--no-debug', default=None, help="Log the loaded metadata")
def detect(image_files, output, config_path, threshold, debug):
    try:
        config = load_config(config_path)
        if threshold is not None:
            config['water_threshold'] = threshold
        if debug is not None:
            config['debug'] = debug

        detect_water_worldview3(image_files, output,
                                threshold=config['water_threshold'],
                                creation_options=config['output']['creation_options'],
                                debug=config['debug'])
    except MsWaterError as e:
        _LOG.error('Scene aborted: %s', e)
        raise click.ClickException(str(e))
    click.echo(output)


@cli.command('show-metadata', help="Print the calibration values of a scene.")
@click.argument('image_files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def show_metadata(image_files):
    try:
        metadata = load_worldview3_metadata(image_files)
    except MsWaterError as e:
        raise click.ClickException(str(e))
    click.echo(metadata.describe())


if __name__ == '__main__':
    cli()

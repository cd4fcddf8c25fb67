"""
Settings for a detection run, read from a YAML file.

Values not given in the file keep their defaults. See config/mswater.yaml.
"""
import copy
import logging
from pathlib import Path

import yaml

from mswater.constants import WATER_THRESHOLD
from mswater.errors import ConfigError

_LOG = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'water_threshold': WATER_THRESHOLD,
    'debug': False,
    'output': {
        'creation_options': {},
    },
}


def _merge(base: dict, overrides: dict, prefix='') -> dict:
    for key, value in overrides.items():
        if key not in base:
            raise ConfigError('Unknown setting %r' % (prefix + key))
        if isinstance(base[key], dict):
            if not isinstance(value, dict):
                raise ConfigError('Setting %r must be a mapping' % (prefix + key))
            if key == 'creation_options':
                base[key].update(value)
            else:
                _merge(base[key], value, prefix + key + '.')
        else:
            base[key] = value
    return base


def load_config(path=None) -> dict:
    """Defaults, updated from the YAML file at path if one is given."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return config

    _LOG.info('Reading configuration from %s', path)
    with open(Path(path)) as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ConfigError('%s does not contain a mapping of settings' % path)
    config = _merge(config, loaded)

    try:
        config['water_threshold'] = float(config['water_threshold'])
    except (TypeError, ValueError):
        raise ConfigError('water_threshold must be a number, got %r' % config['water_threshold']) from None
    return config

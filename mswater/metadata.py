"""
Read WorldView calibration values from a scene's ``.IMD`` metadata file.

The file is a verbose key/value dump. Only a handful of lines matter::

    BEGIN_GROUP = BAND_C
        absCalFactor = 9.295654e-03;
        effectiveBandwidth = 4.730000e-02;
    END_GROUP = BAND_C
    ...
    firstLineTime = 2016-10-23T17:46:54.796950Z;
    meanSunEl = 38.2;

Lines are recognised by substring search rather than a grammar, since real
files vary in indentation and surrounding tokens. Band groups that are not in
the band registry (e.g. the panchromatic band, or non-band groups) are
skipped.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from mswater.bands import band_index, WorldView3Band
from mswater.constants import NUM_WORLDVIEW_BANDS
from mswater.earth_sun import earth_sun_distance_from_timestamp
from mswater.errors import MetadataIncompleteError, MetadataNotFoundError, ParseError
from mswater.raster_io import find_file_in_list

_LOG = logging.getLogger(__name__)

METADATA_EXTENSION = '.IMD'


class LineKind(Enum):
    BEGIN_GROUP = 'BEGIN_GROUP'
    ABS_CAL_FACTOR = 'absCalFactor'
    EFFECTIVE_BANDWIDTH = 'effectiveBandwidth'
    MEAN_SUN_EL = 'meanSunEl'
    FIRST_LINE_TIME = 'firstLineTime'
    OTHER = None


# Checked in order; the first key found in a line decides its kind.
_KEYED_KINDS = [LineKind.BEGIN_GROUP, LineKind.ABS_CAL_FACTOR, LineKind.EFFECTIVE_BANDWIDTH,
                LineKind.MEAN_SUN_EL, LineKind.FIRST_LINE_TIME]


def classify_line(line):
    """
    Decide what a metadata line holds.

    Returns a (kind, text) pair. ``text`` is the part of the line the parser
    needs: the group name for BEGIN_GROUP, the text after the last ``=`` for
    numeric values, the text after the first ``=`` verbatim for the time
    stamp, and None for lines of no interest. A keyed line without ``=``
    keeps its kind with None as text, except BEGIN_GROUP, whose name is then
    empty.
    """
    for kind in _KEYED_KINDS:
        if kind.value in line:
            break
    else:
        return LineKind.OTHER, None

    if '=' not in line:
        return kind, ('' if kind is LineKind.BEGIN_GROUP else None)

    if kind is LineKind.BEGIN_GROUP:
        name = line[line.find('=') + 1:]
        if name.startswith(' '):
            name = name[1:]
        return kind, name.rstrip()
    if kind is LineKind.FIRST_LINE_TIME:
        return kind, line[line.find('=') + 1:]
    return kind, line[line.rfind('=') + 1:]


def parse_metadata_value(text, line_number=None):
    """Parse a numeric value, ignoring whitespace and the trailing ';'."""
    value = text.strip().rstrip(';').strip()
    try:
        return float(value)
    except ValueError:
        raise ParseError('cannot read number from %r' % text.strip(), line_number) from None


@dataclass(frozen=True, eq=False)
class CalibrationMetadata:
    """Per-scene WorldView calibration values. Arrays are indexed by WorldView3Band."""
    abs_cal_factor: np.ndarray
    effective_bandwidth: np.ndarray
    mean_sun_elevation: float  # degrees
    earth_sun_distance: float  # AU
    acquisition_timestamp: str

    def describe(self):
        """Readable multi-line dump of the record."""
        return '\n'.join([
            'abs_cal_factor      %s' % np.array2string(self.abs_cal_factor),
            'effective_bandwidth %s' % np.array2string(self.effective_bandwidth),
            'mean_sun_elevation  %s' % self.mean_sun_elevation,
            'earth_sun_distance  %s' % self.earth_sun_distance,
            'datetime            %s' % self.acquisition_timestamp.strip(),
        ])


def _empty_coefficients():
    return np.full(NUM_WORLDVIEW_BANDS, np.nan, dtype=np.float64)


@dataclass
class MetadataBuilder:
    """Calibration values gathered so far while scanning a metadata file."""
    abs_cal_factor: np.ndarray = field(default_factory=_empty_coefficients)
    effective_bandwidth: np.ndarray = field(default_factory=_empty_coefficients)
    mean_sun_elevation: float = float('nan')
    acquisition_timestamp: str = ''

    def missing_fields(self):
        missing = []
        for name in ('abs_cal_factor', 'effective_bandwidth'):
            values = getattr(self, name)
            missing.extend('%s[%s]' % (name, WorldView3Band(i).name)
                           for i in np.flatnonzero(np.isnan(values)))
        if np.isnan(self.mean_sun_elevation):
            missing.append('mean_sun_elevation')
        if not self.acquisition_timestamp:
            missing.append('acquisition_timestamp')
        return missing

    def finalize(self):
        """Populate derived values and freeze the record."""
        if not 0.0 < self.mean_sun_elevation <= 90.0:
            raise ParseError('meanSunEl %s is outside (0, 90] degrees' % self.mean_sun_elevation)

        earth_sun_distance = earth_sun_distance_from_timestamp(self.acquisition_timestamp)

        abs_cal_factor = self.abs_cal_factor.copy()
        effective_bandwidth = self.effective_bandwidth.copy()
        abs_cal_factor.flags.writeable = False
        effective_bandwidth.flags.writeable = False

        return CalibrationMetadata(abs_cal_factor=abs_cal_factor,
                                   effective_bandwidth=effective_bandwidth,
                                   mean_sun_elevation=float(self.mean_sun_elevation),
                                   earth_sun_distance=earth_sun_distance,
                                   acquisition_timestamp=self.acquisition_timestamp)


class MetadataParser:
    """
    Line-by-line state machine over a metadata file.

    Outside a recognised band group ``channel_index`` is -1, and per-band
    values are rejected. Inside a group it is the group's band index.
    """
    expected_count = 2 * NUM_WORLDVIEW_BANDS + 2

    def __init__(self):
        self.channel_index = -1
        self.found_count = 0
        self.line_number = 0
        self.builder = MetadataBuilder()

    @property
    def in_band_group(self):
        return self.channel_index >= 0

    def feed(self, line):
        self.line_number += 1
        kind, text = classify_line(line)

        if kind is LineKind.BEGIN_GROUP:
            index = band_index(text)
            if index is None:
                _LOG.debug('Ignoring metadata group %r', text)
                self.channel_index = -1
            else:
                self.channel_index = index
            return

        if kind in (LineKind.ABS_CAL_FACTOR, LineKind.EFFECTIVE_BANDWIDTH) and not self.in_band_group:
            raise ParseError('%s outside band group' % kind.value, self.line_number)
        if kind is not LineKind.OTHER and text is None:
            raise ParseError("%s line is missing '='" % kind.value, self.line_number)

        if kind in (LineKind.ABS_CAL_FACTOR, LineKind.EFFECTIVE_BANDWIDTH):
            target = (self.builder.abs_cal_factor if kind is LineKind.ABS_CAL_FACTOR
                      else self.builder.effective_bandwidth)
            target[self.channel_index] = parse_metadata_value(text, self.line_number)
            self.found_count += 1
        elif kind is LineKind.MEAN_SUN_EL:
            self.builder.mean_sun_elevation = parse_metadata_value(text, self.line_number)
            self.found_count += 1
        elif kind is LineKind.FIRST_LINE_TIME:
            self.builder.acquisition_timestamp = text
            self.found_count += 1

    def finish(self):
        """Check that we got what we need, then compute derived values."""
        missing = self.builder.missing_fields()
        if self.found_count != self.expected_count or missing:
            raise MetadataIncompleteError(self.found_count, self.expected_count, missing)
        return self.builder.finalize()


def read_worldview3_metadata(lines):
    """Parse an iterable of ``.IMD`` lines into a finalized CalibrationMetadata."""
    parser = MetadataParser()
    for line in lines:
        parser.feed(line.rstrip('\r\n'))
    return parser.finish()


def load_worldview3_metadata(input_paths):
    """Locate the ``.IMD`` file among the candidate paths and parse it."""
    metadata_path = find_file_in_list(input_paths, METADATA_EXTENSION)
    if metadata_path is None:
        raise MetadataNotFoundError('WorldView metadata file', input_paths)

    _LOG.info('Reading metadata from %s', metadata_path)
    with open(metadata_path, 'r') as handle:
        metadata = read_worldview3_metadata(handle)
    _LOG.info('Scene acquired %s, sun elevation %.2f deg, Earth-Sun distance %.6f AU',
              metadata.acquisition_timestamp.strip().rstrip(';'), metadata.mean_sun_elevation,
              metadata.earth_sun_distance)
    return metadata

"""
Exceptions raised while processing a scene.

None of these are retried: they all describe malformed or missing static
inputs, so the current scene is aborted.
"""


class MsWaterError(Exception):
    """Base class for all scene processing failures."""


class InputFileNotFoundError(MsWaterError, FileNotFoundError):
    """A required input is missing from the candidate file list."""

    def __init__(self, description, candidates):
        self.candidates = list(candidates)
        super().__init__('%s not found among: %s' % (description, ', '.join(map(str, self.candidates)) or '(none)'))


class ImageNotFoundError(InputFileNotFoundError):
    pass


class MetadataNotFoundError(InputFileNotFoundError):
    pass


class ParseError(MsWaterError, ValueError):
    """A metadata line is malformed or appears out of context."""

    def __init__(self, message, line_number=None):
        self.line_number = line_number
        if line_number is not None:
            message = 'line %d: %s' % (line_number, message)
        super().__init__(message)


class MetadataIncompleteError(ParseError):
    """Fewer calibration fields were found than the sensor requires."""

    def __init__(self, found, expected, missing=()):
        self.found = found
        self.expected = expected
        self.missing = tuple(missing)
        message = 'Failed to find all required metadata: found %d of %d fields' % (found, expected)
        if self.missing:
            message += ' (missing %s)' % ', '.join(self.missing)
        super().__init__(message)


class TimestampFormatError(MsWaterError, ValueError):
    """The acquisition time does not match YYYY-MM-DDTHH:MM:SS.ffffffZ."""

    def __init__(self, text, reason):
        self.text = text
        super().__init__('Invalid acquisition time %r: %s' % (text, reason))


class GeoReferenceReadError(MsWaterError):
    """The input raster has no usable geographic transform."""


class SensorFormatError(MsWaterError):
    """The input raster does not have the layout of the expected sensor product."""


class ConfigError(MsWaterError, ValueError):
    """The configuration file contains unknown or invalid settings."""


class RasterReadError(MsWaterError):
    """GDAL failed to open or read the input image."""


class RasterWriteError(MsWaterError):
    """GDAL failed to create or write the output layer."""

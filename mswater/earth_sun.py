"""
Earth-Sun distance from the scene acquisition time.

Uses the approximation from "Radiometric Use of WorldView-3 Imagery":
the Julian day of the acquisition gives the Sun's mean anomaly, from which
the distance in astronomical units follows.
"""
import math
from collections import namedtuple

from mswater.errors import TimestampFormatError

AcquisitionTime = namedtuple('AcquisitionTime', ['year', 'month', 'day', 'hour', 'minute', 'second'])

J2000 = 2451545.0

# (name, start, stop, lower, upper) for the fixed-width fields of YYYY-MM-DDTHH:MM:SS.ffffffZ
_FIELDS = (
    ('year', 0, 4, 1, 9999),
    ('month', 5, 7, 1, 12),
    ('day', 8, 10, 1, 31),
    ('hour', 11, 13, 0, 23),
    ('minute', 14, 16, 0, 59),
)
_SECOND_SLICE = slice(17, 25)


def parse_timestamp(text):
    """
    Split an ``.IMD`` time stamp into its calendar fields.

    Input format: "2016-10-23T17:46:54.796950Z;" (surrounding whitespace and
    the statement terminator are tolerated).
    """
    stamp = text.strip().rstrip(';').strip()
    values = {}
    for name, start, stop, lower, upper in _FIELDS:
        chunk = stamp[start:stop]
        if len(chunk) != stop - start or not chunk.isdecimal():
            raise TimestampFormatError(text, '%s field %r is not a number' % (name, chunk))
        value = int(chunk)
        if not lower <= value <= upper:
            raise TimestampFormatError(text, '%s %d out of range' % (name, value))
        values[name] = value

    chunk = stamp[_SECOND_SLICE].rstrip('Z')
    try:
        second = float(chunk)
    except ValueError:
        raise TimestampFormatError(text, 'seconds field %r is not a number' % chunk) from None
    if not (math.isfinite(second) and 0.0 <= second < 61.0):
        raise TimestampFormatError(text, 'seconds %r out of range' % chunk)

    return AcquisitionTime(second=second, **values)


def julian_day(year, month, day, hour, minute, second):
    """Julian day number (with fractional day) of a UT calendar time."""
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    ut = hour + minute / 60.0 + second / 3600.0
    return (math.floor(365.25 * (year + 4716)) + math.floor(30.6001 * (month + 1))
            + day + ut / 24.0 + b - 1524.5)


def compute_earth_sun_distance(year, month, day, hour, minute, second):
    """Earth-Sun distance in AU at the given UT time."""
    d = julian_day(year, month, day, hour, minute, second) - J2000
    g = math.radians(357.529 + 0.98560028 * d)  # mean anomaly
    return 1.00014 - 0.01671 * math.cos(g) - 0.00014 * math.cos(2 * g)


def earth_sun_distance_from_timestamp(text):
    return compute_earth_sun_distance(*parse_timestamp(text))

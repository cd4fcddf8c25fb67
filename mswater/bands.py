"""
Band index registry.

Channel positions follow the interleaved band order of the sensor products,
and the metadata band group names resolve to the same positions.
"""
from enum import IntEnum


class Spot67Band(IntEnum):
    PAN = 0
    BLUE = 1
    GREEN = 2
    RED = 3
    NIR = 4


class WorldView3Band(IntEnum):
    """Band order is Coastal, Blue, Green, Yellow, Red, Red-Edge, Near-IR1, Near-IR2"""
    COASTAL = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3
    RED = 4
    RED_EDGE = 5
    NIR1 = 6
    NIR2 = 7


# { .IMD group name : channel }
WORLDVIEW_GROUP_NAMES = {
    'BAND_C': WorldView3Band.COASTAL,
    'BAND_B': WorldView3Band.BLUE,
    'BAND_G': WorldView3Band.GREEN,
    'BAND_Y': WorldView3Band.YELLOW,
    'BAND_R': WorldView3Band.RED,
    'BAND_RE': WorldView3Band.RED_EDGE,
    'BAND_N': WorldView3Band.NIR1,
    'BAND_N2': WorldView3Band.NIR2,
}


def band_index(name, registry=WORLDVIEW_GROUP_NAMES):
    """
    Resolve a metadata band group name to its channel index.

    Returns None for names outside the vocabulary, e.g. the panchromatic band
    or non-band groups, which callers are expected to skip.
    """
    band = registry.get(name.strip())
    if band is None:
        return None
    return int(band)

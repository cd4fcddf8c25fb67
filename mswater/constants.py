"""
Water detection output specification
====================================

Each value in a water detection layer is one of three labels, stored as uint8.

=====  ======  ======================================================
Value  Label   Meaning
=====  ======  ======================================================
0      LAND    valid observation, no water present
1      WATER   valid observation, water present
255    NODATA  pixel masked out (missing all earth observation bands)
=====  ======  ======================================================

NODATA doubles as the declared nodata value of the output raster.
"""

# pylint: disable=bad-whitespace, line-too-long

LAND   = 0     # valid data, NDWI at or below the water threshold
WATER  = 1     # valid data, NDWI above the water threshold
NODATA = 255   # invalid input pixel

NUM_SPOT67_BANDS    = 5
NUM_WORLDVIEW_BANDS = 8

# Provisional. Simple NDWI thresholding does not work well on many scenes.
WATER_THRESHOLD = 0.1

# Band-averaged solar spectral irradiance (W/m^2/um), from "Radiometric Use of WorldView-2 Imagery".
# Panchromatic (1580.8140) is not part of the multispectral product.
WORLDVIEW_ESUN = (
    1758.2229,  # Coastal
    1974.2416,  # Blue
    1856.4104,  # Green
    1738.4791,  # Yellow
    1559.4555,  # Red
    1342.0695,  # Red Edge
    1069.7302,  # NIR 1
    861.2866,   # NIR 2
)

# The image is uint16 but only 11 bits are used
WORLDVIEW_MAX_DN = 2047

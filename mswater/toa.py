"""
Conversion of raw WorldView digital numbers to top-of-atmosphere reflectance.

Per band i::

    radiance[i]    = dn[i] * abs_cal_factor[i] / effective_bandwidth[i]
    reflectance[i] = radiance[i] * d^2 * pi / (cos(90 - sun_elevation) * esun[i])

The arithmetic is applied to every pixel, valid or not. Validity is carried
through unchanged and callers must check it before trusting a value.
"""
import numpy as np

from mswater.constants import WORLDVIEW_ESUN
from mswater.image import MaskedPixels


def _per_band(values, ndim):
    """Shape a per-band vector to broadcast against band-first pixel data."""
    return np.asarray(values, dtype=np.float64).reshape((-1,) + (1,) * (ndim - 1))


def reflectance_scale_factor(metadata):
    """Earth-Sun distance and solar zenith term shared by all bands."""
    return (metadata.earth_sun_distance * metadata.earth_sun_distance * np.pi /
            np.cos(np.radians(90.0 - metadata.mean_sun_elevation)))


def convert_to_radiance(data, metadata):
    data = np.asarray(data, dtype=np.float32)
    gain = _per_band(metadata.abs_cal_factor, data.ndim) / _per_band(metadata.effective_bandwidth, data.ndim)
    return (data * gain).astype(np.float32)


def convert_to_toa(pixels, metadata, solar_irradiance=WORLDVIEW_ESUN):
    """
    Convert masked raw pixels to masked TOA reflectance pixels.

    :param pixels: MaskedPixels of raw counts, band-first
    :param metadata: CalibrationMetadata of the scene
    :param solar_irradiance: band-averaged solar irradiance per band
    :return: MaskedPixels of float32 reflectance with the same validity
    """
    radiance = convert_to_radiance(pixels.data, metadata)
    esun = _per_band(solar_irradiance, radiance.ndim)
    reflectance = radiance * reflectance_scale_factor(metadata) / esun
    return MaskedPixels(reflectance.astype(np.float32), pixels.valid)


class WorldView3Toa:
    """TOA conversion bound to the metadata of one scene."""

    def __init__(self, metadata, solar_irradiance=WORLDVIEW_ESUN):
        self.metadata = metadata
        self.solar_irradiance = tuple(solar_irradiance)

    def __call__(self, pixels):
        return convert_to_toa(pixels, self.metadata, self.solar_irradiance)

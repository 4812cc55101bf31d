"""Signal processing primitives for FMCW radar frames.

Modules in this package implement chirp synthesis and matched
filtering, range and Doppler transforms, digital beamforming, clutter
suppression, window functions, whole-frame range–Doppler maps and
CFAR detection.
"""

from . import windows, fft, chirp, range_profile, doppler, beamforming, clutter, rd_map, cfar

__all__ = [
    "windows",
    "fft",
    "chirp",
    "range_profile",
    "doppler",
    "beamforming",
    "clutter",
    "rd_map",
    "cfar",
]

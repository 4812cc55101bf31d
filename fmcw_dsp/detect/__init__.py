"""Detection and target estimation.

This package converts range–Doppler maps into lists of detection
cells and then into range, velocity and angle estimates.
"""

from . import peaks, targets

__all__ = ["peaks", "targets"]

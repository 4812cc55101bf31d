"""Top level package for FMCW radar signal processing.

This package turns raw per-chirp, per-antenna samples into range
profiles, velocity spectra, angle spectra and clutter-suppressed
range–Doppler maps.  Users should typically import from the
subpackages, for example:

```python
from fmcw_dsp.dsp.chirp import ChirpParameters, generate_chirp
from fmcw_dsp.dsp.rd_map import compute_range_doppler_map
from fmcw_dsp.detect.targets import create_detections
```
"""

__all__ = [
    "config",
    "errors",
    "dsp",
    "detect",
]

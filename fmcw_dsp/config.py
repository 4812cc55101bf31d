"""Radar configuration.

`RadarConfig` gathers the parameters the processing stages need: the
chirp description, the antenna geometry, the scan and clutter settings
and the CFAR configuration.  Configurations are usually stored as YAML
and loaded with `load_config`, optionally with dotted-key overrides:

```python
cfg = load_config("radar.yaml", overrides={"cfar.threshold_factor": 3.0})
```
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .dsp.beamforming import AntennaArray, angular_resolution
from .dsp.chirp import ChirpParameters
from .dsp.doppler import velocity_resolution
from .dsp.range_profile import SPEED_OF_LIGHT, range_resolution
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def apply_overrides(cfg: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively override keys in a configuration dictionary.

    Keys in `overrides` can be dot separated to access nested
    dictionaries.  A new dictionary is returned; the input is not
    modified.
    """
    result = copy.deepcopy(cfg)
    for key, value in overrides.items():
        parts = key.split(".")
        d = result
        for p in parts[:-1]:
            if p not in d or not isinstance(d[p], dict):
                d[p] = {}
            d = d[p]
        d[parts[-1]] = value
    return result


_FLOAT_FIELDS = (
    "start_frequency",
    "bandwidth",
    "chirp_duration",
    "sample_rate",
    "frame_time",
    "element_spacing",
    "clutter_threshold",
    "max_range",
    "max_velocity",
)
_NON_NEGATIVE = {"start_frequency", "clutter_threshold"}
_INT_FIELDS = ("samples_per_chirp", "num_chirps", "num_elements", "angle_bins")


def _as_float(name: str, value: Any) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(result):
        raise ConfigurationError(f"{name} must be finite, got {value!r}")
    return result


@dataclass
class RadarConfig:
    """Complete configuration of one radar front end.

    Attributes
    ----------
    start_frequency : float
        Start frequency of the sweep in Hz.
    bandwidth : float
        Swept bandwidth in Hz.
    chirp_duration : float
        Sweep duration in seconds.
    sample_rate : float
        ADC sampling rate in Hz.
    samples_per_chirp : int
        Samples per chirp.
    num_chirps : int
        Chirps per frame.
    frame_time : float
        Duration of one frame in seconds.
    num_elements : int
        Receive antenna elements.
    element_spacing : float
        Element spacing in wavelengths.
    angle_bins : int
        Number of scanned angles.
    clutter_threshold : float
        Magnitude below which zero-Doppler cells are suppressed.
    max_range : float
        Range covered by the range axis in metres.
    max_velocity : float
        Maximum unambiguous velocity in m/s.
    fft_method : str
        `'fft'` or `'direct'`.
    wavelength_override : float, optional
        Carrier wavelength in metres; derived from `start_frequency`
        when omitted.
    cfar : dict
        Keyword configuration for `cfar_from_config`.
    """

    start_frequency: float = 77e9
    bandwidth: float = 1e9
    chirp_duration: float = 100e-6
    sample_rate: float = 10e6
    samples_per_chirp: int = 1000
    num_chirps: int = 64
    frame_time: float = 0.01
    num_elements: int = 8
    element_spacing: float = 0.5
    angle_bins: int = 180
    clutter_threshold: float = 0.1
    max_range: float = 200.0
    max_velocity: float = 100.0
    fft_method: str = "fft"
    wavelength_override: Optional[float] = None
    cfar: Dict[str, Any] = field(default_factory=lambda: {"method": "ca"})

    def __post_init__(self) -> None:
        # YAML 1.1 reads "77e9" as a string, so coerce before checking
        for name in _FLOAT_FIELDS:
            setattr(self, name, _as_float(name, getattr(self, name)))
        for name in _INT_FIELDS:
            value = getattr(self, name)
            try:
                as_float = float(value)
                as_int = int(as_float)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ConfigurationError(f"{name} must be a finite integer, got {value!r}") from exc
            if as_int != as_float or as_int <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
            setattr(self, name, as_int)
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if name in _NON_NEGATIVE:
                if value < 0:
                    raise ConfigurationError(f"{name} must be non-negative, got {value}")
            elif value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.fft_method not in {"fft", "direct"}:
            raise ConfigurationError(f"Unknown fft_method: {self.fft_method}")
        if self.wavelength_override is not None:
            self.wavelength_override = _as_float("wavelength_override", self.wavelength_override)
            if self.wavelength_override <= 0:
                raise ConfigurationError("wavelength_override must be positive")
        elif self.start_frequency == 0:
            raise ConfigurationError("wavelength_override is required when start_frequency is 0")
        if not isinstance(self.cfar, dict):
            raise ConfigurationError("cfar must be a mapping")

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "RadarConfig":
        """Build a configuration, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**cfg)

    @property
    def wavelength(self) -> float:
        """Carrier wavelength in metres."""
        if self.wavelength_override is not None:
            return float(self.wavelength_override)
        return SPEED_OF_LIGHT / self.start_frequency

    @property
    def chirp_interval(self) -> float:
        """Time between chirp starts in seconds."""
        return self.frame_time / self.num_chirps

    def chirp_parameters(self) -> ChirpParameters:
        return ChirpParameters(
            start_frequency=self.start_frequency,
            bandwidth=self.bandwidth,
            chirp_duration=self.chirp_duration,
            sample_rate=self.sample_rate,
            samples_per_chirp=self.samples_per_chirp,
        )

    def antenna_array(self) -> AntennaArray:
        return AntennaArray(self.num_elements, self.element_spacing)

    @property
    def range_resolution(self) -> float:
        return range_resolution(self.bandwidth)

    @property
    def velocity_resolution(self) -> float:
        return velocity_resolution(self.wavelength, self.num_chirps, self.frame_time)

    @property
    def angular_resolution(self) -> float:
        return angular_resolution(self.num_elements, self.element_spacing)


def load_config(path: str | Path, overrides: Dict[str, Any] | None = None) -> RadarConfig:
    """Load a `RadarConfig` from a YAML file.

    Parameters
    ----------
    path : str or Path
        YAML file containing a mapping of `RadarConfig` fields.
    overrides : dict, optional
        Dotted-key overrides applied after loading, e.g.
        `{"cfar.guard_cells": 4}`.
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read configuration {path}: {exc}") from exc
    if raw is None:
        logger.info("configuration %s is empty, using defaults", path)
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration {path} must contain a mapping")
    if overrides:
        raw = apply_overrides(raw, overrides)
    return RadarConfig.from_dict(raw)

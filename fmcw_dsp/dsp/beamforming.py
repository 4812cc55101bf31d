"""Digital beamforming for a uniform linear array.

The array is described by `AntennaArray`.  For each scanned angle the
per-element samples are phase-steered, weighted and summed, and the
output power forms the angle spectrum.  Angles are scanned on the grid
`-90 + 180*a/angle_bins` degrees for `a = 0..angle_bins-1`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from ..errors import ConfigurationError, DimensionMismatch


@dataclass(eq=False)
class AntennaArray:
    """Uniform linear antenna array.

    Attributes
    ----------
    num_elements : int
        Number of antenna elements.
    element_spacing : float
        Inter-element spacing in wavelengths.  Defaults to 0.5.
    weights : np.ndarray
        Complex gain per element.  Defaults to unity for every element.
    """

    num_elements: int
    element_spacing: float = 0.5
    weights: Optional[np.ndarray] = field(default=None)

    def __post_init__(self) -> None:
        count = float(self.num_elements)
        if not math.isfinite(count) or count != int(count) or count <= 0:
            raise ConfigurationError("num_elements must be a positive integer")
        self.num_elements = int(self.num_elements)
        if not math.isfinite(self.element_spacing) or self.element_spacing <= 0:
            raise ConfigurationError("element_spacing must be positive and finite")
        if self.weights is None:
            self.weights = np.ones(self.num_elements, dtype=np.complex128)
        else:
            self.weights = np.array(self.weights, dtype=np.complex128)
            if self.weights.shape != (self.num_elements,):
                raise DimensionMismatch(
                    f"expected {self.num_elements} weights, got shape {self.weights.shape}"
                )

    def set_weights(self, weights: Sequence[complex]) -> None:
        """Replace the element weights, e.g. to apply a taper."""
        weights = np.array(weights, dtype=np.complex128)
        if weights.shape != (self.num_elements,):
            raise DimensionMismatch(
                f"expected {self.num_elements} weights, got shape {weights.shape}"
            )
        self.weights = weights

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AntennaArray):
            return NotImplemented
        return (
            self.num_elements == other.num_elements
            and self.element_spacing == other.element_spacing
            and np.array_equal(self.weights, other.weights)
        )


def scan_angles(angle_bins: int = 180) -> np.ndarray:
    """Return the scanned angles in degrees."""
    if angle_bins <= 0:
        raise ConfigurationError("angle_bins must be positive")
    return -90.0 + (180.0 * np.arange(angle_bins)) / angle_bins


def beamform_snapshot(snapshot: Sequence[complex], array: AntennaArray, angle_bins: int = 180) -> np.ndarray:
    """Beamform one complex value per antenna into an angle spectrum.

    Elements beyond `min(array.num_elements, len(snapshot))` are
    ignored.  Elements are accumulated in index order so the result is
    reproducible bit for bit.

    Returns
    -------
    np.ndarray
        Float64 power spectrum of length `angle_bins`.
    """
    samples = np.asarray(snapshot, dtype=np.complex128).ravel()
    elements = list(range(min(array.num_elements, samples.shape[0])))
    return _steer(samples, elements, array, angle_bins)


def digital_beamforming(
    antenna_signals: Sequence[Sequence[complex]],
    array: AntennaArray,
    angle_bins: int = 180,
) -> np.ndarray:
    """Compute the angle spectrum from per-antenna sample vectors.

    Only the first sample of each antenna channel enters the sum.
    Channels without samples are skipped rather than treated as zero.

    Parameters
    ----------
    antenna_signals : sequence of sequences
        One complex sample vector per antenna; vectors may differ in
        length.
    array : AntennaArray
        Array geometry and weights.
    angle_bins : int, optional
        Number of scanned angles.  Defaults to 180.

    Returns
    -------
    np.ndarray
        Float64 power spectrum `|sum|^2` of length `angle_bins`.
    """
    count = min(array.num_elements, len(antenna_signals))
    samples = np.zeros(count, dtype=np.complex128)
    elements = []
    for e in range(count):
        channel = np.asarray(antenna_signals[e], dtype=np.complex128).ravel()
        if channel.shape[0] == 0:
            continue
        samples[e] = channel[0]
        elements.append(e)
    return _steer(samples, elements, array, angle_bins)


def _steer(samples: np.ndarray, elements: Sequence[int], array: AntennaArray, angle_bins: int) -> np.ndarray:
    angles = np.radians(scan_angles(angle_bins))
    sin_theta = np.sin(angles)
    output = np.zeros(angle_bins, dtype=np.complex128)
    for e in elements:
        phase = 2.0 * np.pi * e * array.element_spacing * sin_theta
        output += array.weights[e] * np.exp(1j * phase) * samples[e]
    return np.abs(output) ** 2


def estimate_angle(spectrum: np.ndarray) -> float:
    """Return the scanned angle (degrees) of the spectrum peak."""
    spectrum = np.asarray(spectrum, dtype=np.float64)
    if spectrum.ndim != 1 or spectrum.shape[0] == 0:
        raise DimensionMismatch("angle spectrum must be a non-empty vector")
    idx = int(np.argmax(spectrum))
    return float(scan_angles(spectrum.shape[0])[idx])


def angular_resolution(num_elements: int, element_spacing: float) -> float:
    """Return the angular resolution `2/(N*d)` converted to degrees."""
    aperture = num_elements * element_spacing
    if not math.isfinite(aperture) or aperture <= 0:
        raise ConfigurationError("num_elements * element_spacing must be positive")
    return (2.0 / aperture) * (180.0 / math.pi)

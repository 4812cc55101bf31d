import numpy as np
import pytest

from fmcw_dsp.dsp.beamforming import (
    AntennaArray,
    angular_resolution,
    beamform_snapshot,
    digital_beamforming,
    estimate_angle,
    scan_angles,
)
from fmcw_dsp.errors import ConfigurationError, DimensionMismatch


def _plane_wave(num_elements: int, spacing: float, angle_deg: float) -> np.ndarray:
    e = np.arange(num_elements)
    return np.exp(-2j * np.pi * e * spacing * np.sin(np.radians(angle_deg)))


def test_default_weights_are_unity() -> None:
    array = AntennaArray(4)
    assert array.element_spacing == 0.5
    assert np.array_equal(array.weights, np.ones(4, dtype=complex))


def test_scan_grid() -> None:
    angles = scan_angles(180)
    assert angles.shape == (180,)
    assert angles[0] == -90.0
    assert angles[90] == 0.0
    assert np.isclose(angles[-1], 89.0)


def test_single_element_spectrum_is_flat() -> None:
    array = AntennaArray(1)
    spectrum = digital_beamforming([[0.3 + 0.4j, 5.0]], array)
    assert spectrum.shape == (180,)
    assert np.allclose(spectrum, 0.25)


def test_peak_at_arrival_angle() -> None:
    array = AntennaArray(8, 0.5)
    signals = [[s] for s in _plane_wave(8, 0.5, 30.0)]
    spectrum = digital_beamforming(signals, array)
    assert np.isclose(spectrum.max(), 64.0)
    assert estimate_angle(spectrum) == 30.0


def test_only_first_sample_of_each_channel_is_used() -> None:
    # Known limitation: later samples never influence the spectrum.
    array = AntennaArray(4)
    a = [[1.0, 9.0], [1j, -3.0], [-1.0], [0.5, 0.5, 0.5]]
    b = [[1.0], [1j, 100.0], [-1.0, 7j], [0.5]]
    assert np.array_equal(digital_beamforming(a, array), digital_beamforming(b, array))


def test_empty_channel_is_skipped() -> None:
    array = AntennaArray(3)
    spectrum = digital_beamforming([[1.0], [], [1.0]], array, angle_bins=36)
    assert np.allclose(spectrum, beamform_snapshot([1.0, 0.0, 1.0], array, angle_bins=36))


def test_channel_count_limits_elements() -> None:
    array = AntennaArray(8)
    two = digital_beamforming([[1.0], [1.0]], array, angle_bins=10)
    assert np.allclose(two, beamform_snapshot([1.0, 1.0], AntennaArray(2), angle_bins=10))


def test_weights_scale_output() -> None:
    array = AntennaArray(2, weights=[2.0, 2.0])
    spectrum = beamform_snapshot([1.0, 1.0], array, angle_bins=180)
    assert np.isclose(spectrum[90], 16.0)
    with pytest.raises(DimensionMismatch):
        array.set_weights([1.0])


def test_angular_resolution() -> None:
    assert np.isclose(angular_resolution(8, 0.5), 28.65, atol=0.01)
    with pytest.raises(ConfigurationError):
        angular_resolution(0, 0.5)


def test_invalid_array() -> None:
    with pytest.raises(ConfigurationError):
        AntennaArray(0)
    with pytest.raises(ConfigurationError):
        AntennaArray(4, element_spacing=-0.5)
    with pytest.raises(ConfigurationError):
        AntennaArray(float("nan"))
    with pytest.raises(ConfigurationError):
        AntennaArray(float("inf"))
    with pytest.raises(ConfigurationError):
        scan_angles(0)


def test_arrays_compare_by_value() -> None:
    assert AntennaArray(4) == AntennaArray(4)
    assert AntennaArray(4) != AntennaArray(4, element_spacing=0.25)
    assert AntennaArray(2) != AntennaArray(2, weights=[1.0, 1j])
    assert AntennaArray(3) != AntennaArray(4)

import numpy as np
import pytest

from fmcw_dsp.detect.peaks import detect_peaks
from fmcw_dsp.detect.targets import Detection, create_detections
from fmcw_dsp.dsp.beamforming import AntennaArray


def _rd_map() -> np.ndarray:
    rd = np.ones((20, 16), dtype=complex)
    rd[10, 8] = 10.0
    return rd


def test_detect_peaks_returns_strong_cell() -> None:
    coords, mask, noise = detect_peaks(_rd_map(), {"method": "ca", "guard_cells": 1, "training_cells": 2})
    assert coords.tolist() == [[10, 8]]
    assert mask.shape == (20, 16)
    assert np.isclose(noise[10, 8], 1.0)


def test_detect_peaks_default_config_handles_small_maps() -> None:
    # default CA window (margin 10) does not fit: no detections, no error
    coords, mask, _ = detect_peaks(_rd_map())
    assert coords.shape == (0, 2)
    assert not mask.any()


def test_create_detections_physical_units() -> None:
    rd = _rd_map()
    coords, _, noise = detect_peaks(rd, {"method": "ca", "guard_cells": 1, "training_cells": 2})
    dets = create_detections(rd, coords, noise, max_range=200.0, max_velocity=50.0)
    assert len(dets) == 1
    det = dets[0]
    assert isinstance(det, Detection)
    assert np.isclose(det.range, 100.0)
    assert det.velocity == 0.0
    assert det.angle == 0.0
    assert np.isclose(det.power_dbm, -10.0)
    assert np.isclose(det.snr, 20.0)


def test_create_detections_estimates_angle() -> None:
    rd = _rd_map()
    coords, _, noise = detect_peaks(rd, {"method": "ca", "guard_cells": 1, "training_cells": 2})
    array = AntennaArray(8, 0.5)
    antenna_maps = np.ones((8, 20, 16), dtype=complex)
    e = np.arange(8)
    antenna_maps[:, 10, 8] = np.exp(-2j * np.pi * e * 0.5 * np.sin(np.radians(-20.0)))
    dets = create_detections(rd, coords, noise, 200.0, 50.0, antenna_maps=antenna_maps, array=array)
    assert dets[0].angle == -20.0


def test_negative_coordinates_raise_index_error() -> None:
    rd = _rd_map()
    noise = np.ones(rd.shape)
    with pytest.raises(IndexError):
        create_detections(rd, np.array([[-1, 8]]), noise, 200.0, 50.0)
    with pytest.raises(IndexError):
        create_detections(rd, np.array([[10, 16]]), noise, 200.0, 50.0)

import numpy as np
import pytest

from fmcw_dsp.dsp.chirp import ChirpParameters, generate_chirp, matched_filter
from fmcw_dsp.dsp.doppler import doppler_fft
from fmcw_dsp.dsp.range_profile import range_fft
from fmcw_dsp.dsp.rd_map import (
    compute_range_doppler_map,
    compute_range_profiles,
    magnitude_db,
    magnitude_linear,
)
from fmcw_dsp.errors import DimensionMismatch


def _frame(chirps: int = 8, samples: int = 16, range_bin: int = 5, doppler_bin: int = 0) -> np.ndarray:
    n = np.arange(samples)
    c = np.arange(chirps)[:, np.newaxis]
    return np.exp(2j * np.pi * (range_bin * n / samples + doppler_bin * c / chirps))


def test_range_profiles_shape_and_values() -> None:
    frame = _frame()
    profiles = compute_range_profiles(frame)
    assert profiles.shape == (8, 16)
    assert np.allclose(profiles[3], range_fft(frame[3]))


def test_range_profiles_with_reference() -> None:
    params = ChirpParameters(0.0, 1e6, 16e-6, 1e6, 16)
    ref = generate_chirp(params)
    frame = _frame()
    profiles = compute_range_profiles(frame, reference=ref, apply_window=False)
    expected = range_fft(matched_filter(frame[2], ref), apply_window=False)
    assert np.allclose(profiles[2], expected)
    with pytest.raises(DimensionMismatch):
        compute_range_profiles(frame, reference=ref[:8])


def test_unshifted_map_matches_per_bin_doppler() -> None:
    frame = _frame(doppler_bin=3)
    profiles = compute_range_profiles(frame)
    rd = compute_range_doppler_map(frame, shift=False)
    assert rd.shape == (16, 8)
    for r in (0, 5, 11):
        assert np.allclose(rd[r], doppler_fft(profiles, r))


def test_stationary_target_lands_in_centre_column() -> None:
    frame = _frame(chirps=8, samples=16, range_bin=5, doppler_bin=0)
    rd = compute_range_doppler_map(frame, apply_window=False)
    r_idx, d_idx = np.unravel_index(np.argmax(np.abs(rd)), rd.shape)
    assert (r_idx, d_idx) == (5, 4)


def test_direct_method_matches_fft() -> None:
    rng = np.random.default_rng(3)
    frame = rng.standard_normal((6, 10)) + 1j * rng.standard_normal((6, 10))
    assert np.allclose(
        compute_range_doppler_map(frame, method="direct"),
        compute_range_doppler_map(frame, method="fft"),
    )


def test_magnitudes() -> None:
    x = np.array([3 + 4j, 0.0])
    assert np.allclose(magnitude_linear(x), [5.0, 0.0])
    db = magnitude_db(x)
    assert np.isclose(db[0], 20 * np.log10(5.0 + 1e-6))
    assert np.isfinite(db[1])

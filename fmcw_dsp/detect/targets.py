"""Conversion of range–Doppler detections into target estimates.

Each detection cell is converted to physical range and velocity with
the bin mapping helpers.  When per-antenna range–Doppler maps and an
antenna array are available, the angle is estimated by beamforming the
antenna snapshot of the detected cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..dsp.beamforming import AntennaArray, beamform_snapshot, estimate_angle
from ..dsp.doppler import bin_to_velocity, check_bin
from ..dsp.range_profile import bin_to_range
from ..errors import DimensionMismatch


@dataclass
class Detection:
    """A single target estimate.

    Attributes
    ----------
    r_idx : int
        Index on the range axis of the RD map.
    d_idx : int
        Index on the velocity axis of the RD map.
    range : float
        Range of the detection in metres.
    velocity : float
        Radial velocity in m/s.  Bin `velocity_bins // 2` is zero.
    angle : float
        Estimated azimuth in degrees, 0.0 when no antenna data is given.
    power_dbm : float
        Cell power `10*log10(|x|^2) - 30`.
    snr : float
        Ratio of cell power to the CFAR noise estimate, in dB.
    """

    r_idx: int
    d_idx: int
    range: float
    velocity: float
    angle: float
    power_dbm: float
    snr: float


def create_detections(
    rd_map: np.ndarray,
    coords: np.ndarray,
    noise: np.ndarray,
    max_range: float,
    max_velocity: float,
    antenna_maps: Optional[np.ndarray] = None,
    array: Optional[AntennaArray] = None,
    angle_bins: int = 180,
) -> List[Detection]:
    """Construct a list of `Detection` objects from RD detections.

    Parameters
    ----------
    rd_map : np.ndarray
        Complex RD map of shape `(range_bins, velocity_bins)`.
    coords : np.ndarray
        Integer `(r_idx, d_idx)` coordinates, e.g. from `detect_peaks`.
    noise : np.ndarray
        Noise power per cell, same shape as `rd_map`.
    max_range : float
        Range covered by the range axis in metres.
    max_velocity : float
        Maximum unambiguous velocity in m/s.
    antenna_maps : np.ndarray, optional
        Per-antenna complex RD maps of shape `(antennas, range_bins, velocity_bins)`.
    array : AntennaArray, optional
        Array used to beamform `antenna_maps`.  Both must be given for
        angle estimation.
    angle_bins : int, optional
        Angular grid size for beamforming.  Defaults to 180.
    """
    rd_map = np.asarray(rd_map)
    noise = np.asarray(noise, dtype=np.float64)
    if noise.shape != rd_map.shape:
        raise DimensionMismatch("noise must have the same shape as rd_map")
    if antenna_maps is not None:
        antenna_maps = np.asarray(antenna_maps)
        if antenna_maps.ndim != 3 or antenna_maps.shape[1:] != rd_map.shape:
            raise DimensionMismatch("antenna_maps must have shape (antennas, range_bins, velocity_bins)")
    n_range, n_doppler = rd_map.shape
    detections: List[Detection] = []
    for r_idx, d_idx in np.asarray(coords).reshape(-1, 2):
        r_idx = check_bin(r_idx, n_range, "r_idx")
        d_idx = check_bin(d_idx, n_doppler, "d_idx")
        power = float(np.abs(rd_map[r_idx, d_idx]) ** 2)
        with np.errstate(divide="ignore", invalid="ignore"):
            power_dbm = float(10.0 * np.log10(power) - 30.0)
            snr = float(10.0 * np.log10(power / noise[r_idx, d_idx]))
        angle = 0.0
        if antenna_maps is not None and array is not None:
            spectrum = beamform_snapshot(antenna_maps[:, r_idx, d_idx], array, angle_bins)
            angle = estimate_angle(spectrum)
        detections.append(
            Detection(
                r_idx=r_idx,
                d_idx=d_idx,
                range=bin_to_range(r_idx, n_range, max_range),
                velocity=bin_to_velocity(d_idx, n_doppler, max_velocity),
                angle=angle,
                power_dbm=power_dbm,
                snr=snr,
            )
        )
    return detections

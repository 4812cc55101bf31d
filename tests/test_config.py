import numpy as np
import pytest
import yaml

from fmcw_dsp.config import RadarConfig, apply_overrides, load_config
from fmcw_dsp.dsp.chirp import generate_chirp
from fmcw_dsp.errors import ConfigurationError


def test_defaults_are_valid() -> None:
    cfg = RadarConfig()
    assert np.isclose(cfg.wavelength, 299792458.0 / 77e9)
    assert np.isclose(cfg.range_resolution, 0.1499, atol=1e-4)
    assert np.isclose(cfg.velocity_resolution, cfg.wavelength / (2 * cfg.frame_time))
    assert np.isclose(cfg.angular_resolution, 28.65, atol=0.01)
    assert generate_chirp(cfg.chirp_parameters()).shape == (1000,)
    assert cfg.antenna_array().num_elements == 8


def test_apply_overrides_does_not_modify_input() -> None:
    base = {"bandwidth": 1e9, "cfar": {"method": "ca"}}
    out = apply_overrides(base, {"cfar.guard_cells": 4, "bandwidth": 2e9})
    assert out["cfar"] == {"method": "ca", "guard_cells": 4}
    assert out["bandwidth"] == 2e9
    assert base == {"bandwidth": 1e9, "cfar": {"method": "ca"}}


def test_load_config_from_yaml(tmp_path) -> None:
    path = tmp_path / "radar.yaml"
    path.write_text(
        yaml.dump(
            {
                "start_frequency": "77e9",
                "bandwidth": 150e6,
                "samples_per_chirp": 256,
                "cfar": {"method": "percentile", "percentile": 99.5},
            }
        )
    )
    cfg = load_config(path, overrides={"num_elements": 4})
    assert cfg.start_frequency == 77e9
    assert cfg.samples_per_chirp == 256
    assert cfg.num_elements == 4
    assert cfg.cfar["method"] == "percentile"
    assert np.isclose(cfg.range_resolution, 0.9993, atol=1e-4)


def test_empty_yaml_uses_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == RadarConfig()


@pytest.mark.parametrize(
    "cfg",
    [
        {"bandwidth": -1.0},
        {"sample_rate": float("nan")},
        {"num_chirps": 0},
        {"num_chirps": float("inf")},
        {"num_elements": float("nan")},
        {"samples_per_chirp": 2.5},
        {"fft_method": "winograd"},
        {"start_frequency": 0.0},
        {"bogus_key": 1},
    ],
)
def test_invalid_configuration(cfg) -> None:
    with pytest.raises(ConfigurationError):
        RadarConfig.from_dict(cfg)


def test_missing_file_raises_configuration_error(tmp_path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.yaml")


def test_non_finite_integer_in_yaml(tmp_path) -> None:
    path = tmp_path / "radar.yaml"
    path.write_text("num_chirps: .inf\n")
    with pytest.raises(ConfigurationError):
        load_config(path)

"""
Tests for transform configuration loading.
"""

import math

import pytest

from affine2d.config import TransformConfig
from affine2d.transform import EPSILON, rotate, translate


class TestTransformConfig:
    """Tests for TransformConfig defaults, validation and YAML I/O."""

    @pytest.fixture
    def config_file(self, tmp_path):
        """Write a complete YAML config."""
        path = tmp_path / "transform.yaml"
        path.write_text(
            "epsilon: 1.0e-4\n"
            "display:\n"
            "  precision: 2\n"
            "  padding: 1\n"
        )
        return path

    def test_defaults(self):
        config = TransformConfig()
        assert config.epsilon == EPSILON
        assert config.precision == 3
        assert config.padding == 2

    def test_load(self, config_file):
        config = TransformConfig.from_yaml(str(config_file))
        assert config.epsilon == pytest.approx(1e-4)
        assert config.precision == 2
        assert config.padding == 1

    def test_load_partial(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("display:\n  precision: 5\n")
        config = TransformConfig.from_yaml(str(path))
        assert config.epsilon == EPSILON
        assert config.precision == 5
        assert config.padding == 2

    def test_load_plain_exponent(self, tmp_path):
        """YAML reads 1e-6 (no dot) as a string; it must still load as a float."""
        path = tmp_path / "exp.yaml"
        path.write_text("epsilon: 1e-6\n")
        assert TransformConfig.from_yaml(str(path)).epsilon == pytest.approx(1e-6)

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert TransformConfig.from_yaml(str(path)) == TransformConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TransformConfig.from_yaml(str(tmp_path / "nope.yaml"))

    @pytest.mark.parametrize("kwargs", [
        {"epsilon": -1.0},
        {"precision": -1},
        {"padding": -2},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            TransformConfig(**kwargs)

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("epsilon: -0.5\n")
        with pytest.raises(ValueError):
            TransformConfig.from_yaml(str(path))

    def test_save_and_reload(self, tmp_path):
        config = TransformConfig(epsilon=1e-6, precision=4, padding=0)
        path = tmp_path / "saved.yaml"
        config.to_yaml(str(path))
        assert TransformConfig.from_yaml(str(path)) == config

    def test_fix_uses_epsilon(self):
        t = translate(1e-5, 2)
        TransformConfig().fix(t)
        assert t[6] == pytest.approx(1e-5)
        TransformConfig(epsilon=1e-4).fix(t)
        assert t[6] == 0.0

    def test_fix_quarter_turn(self):
        t = rotate(math.pi / 2)
        TransformConfig().fix(t)
        assert t.values == (0.0, 1.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 1.0)

    def test_format(self, config_file):
        config = TransformConfig.from_yaml(str(config_file))
        assert config.format(translate(1, 2)).split("\n")[2] == "\\  1.00  2.00  1.00 /"

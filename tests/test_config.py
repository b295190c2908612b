"""Tests for kernel configuration loading."""

import pytest

from brepcore.approx import Tolerance
from brepcore.config import BREPCORE_CONFIG, DEFAULT_TOLERANCE, KernelConfig, load_config
from brepcore.errors import ToleranceError
from brepcore.objects import DEFAULT_COLOR
from brepcore.store import DEFAULT_MIN_DISTANCE


class TestKernelConfig:
    """Test KernelConfig construction and validation."""

    def test_defaults(self):
        config = KernelConfig()
        assert config.tolerance == DEFAULT_TOLERANCE
        assert config.min_distance == DEFAULT_MIN_DISTANCE
        assert config.color == DEFAULT_COLOR

    def test_from_mapping(self):
        config = KernelConfig.from_mapping({'tolerance': 0.01, 'color': [0, 128, 255, 255]})
        assert config.tolerance == 0.01
        assert config.color == (0, 128, 255, 255)
        assert config.min_distance == DEFAULT_MIN_DISTANCE

    def test_from_none(self):
        assert KernelConfig.from_mapping(None) == KernelConfig()

    def test_unknown_key(self):
        with pytest.raises(ValueError, match='unknown configuration keys'):
            KernelConfig.from_mapping({'tolerence': 0.01})

    @pytest.mark.parametrize('value', [0, -1.0, float('inf'), float('nan'), True, 'small'])
    def test_bad_tolerance(self, value):
        with pytest.raises(ToleranceError):
            KernelConfig(tolerance=value)

    def test_bad_min_distance(self):
        with pytest.raises(ToleranceError):
            KernelConfig(min_distance=0.0)

    def test_bad_color(self):
        with pytest.raises(ValueError):
            KernelConfig(color=(0, 0, 0))
        with pytest.raises(ValueError):
            KernelConfig(color=(0, 0, 0, 256))

    def test_make_tolerance_and_objects(self):
        config = KernelConfig(tolerance=0.5, min_distance=1e-3)
        assert config.make_tolerance() == Tolerance(0.5)
        objects = config.make_objects()
        assert objects.min_distance == 1e-3
        first = objects.global_vertex_at((0, 0, 0))
        assert objects.global_vertex_at((5e-4, 0, 0)) == first


class TestLoadConfig:
    """Test reading configuration files."""

    def test_from_yaml(self, tmp_path):
        path = tmp_path / 'kernel.yaml'
        path.write_text('tolerance: 0.002\nmin_distance: 1.0e-6\n', encoding='utf-8')
        config = load_config(path)
        assert config.tolerance == 0.002
        assert config.min_distance == 1e-6

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        assert load_config(path) == KernelConfig()

    def test_invalid_file_names_path(self, tmp_path):
        path = tmp_path / 'bad.yaml'
        path.write_text('tolerance: -1\n', encoding='utf-8')
        with pytest.raises(ToleranceError, match='bad.yaml'):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / 'missing.yaml')

    def test_environment_variable(self, tmp_path, monkeypatch):
        path = tmp_path / 'env.yaml'
        path.write_text('tolerance: 0.25\n', encoding='utf-8')
        monkeypatch.setenv(BREPCORE_CONFIG, str(path))
        assert load_config().tolerance == 0.25

    def test_defaults_without_environment(self, monkeypatch):
        monkeypatch.delenv(BREPCORE_CONFIG, raising=False)
        assert load_config() == KernelConfig()

"""ERA Model Config Tests."""
import pytest

from src.engine.era_model_config import EraModelConfig


class TestEraModelConfig:
    """YAML 기반 ERA 모델 설정 로더 테스트."""

    @pytest.fixture
    def config(self):
        return EraModelConfig()

    def test_version(self, config):
        assert config.version == "1.0"

    def test_filters(self, config):
        assert config.min_prior_ip == 20.0
        assert config.min_career_ip == 5.0
        assert config.start_year == 1945

    def test_fit_scale_default(self, config):
        assert config.fit_scale == "rate"

    def test_credible_level(self, config):
        assert config.credible_level == pytest.approx(0.95)

    def test_display(self, config):
        assert config.sample_size == 20
        assert config.sample_seeds == (123, 222)

    def test_overrides_win(self):
        config = EraModelConfig(min_prior_ip=30, start_year=1970)
        assert config.min_prior_ip == 30.0
        assert config.start_year == 1970
        assert config.min_career_ip == 5.0

    def test_none_override_ignored(self):
        config = EraModelConfig(min_prior_ip=None)
        assert config.min_prior_ip == 20.0


class TestCustomConfigFile:

    def test_missing_keys_fall_back(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("filters:\n  min_prior_ip: 40\n", encoding="utf-8")
        config = EraModelConfig(path)
        assert config.min_prior_ip == 40.0
        assert config.min_career_ip == 5.0
        assert config.fit_scale == "rate"
        assert config.version == ""

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = EraModelConfig(str(path))
        assert config.start_year == 1945

    def test_invalid_fit_scale(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("prior:\n  fit_scale: whip\n", encoding="utf-8")
        with pytest.raises(ValueError):
            EraModelConfig(path)

    def test_invalid_credible_level(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("posterior:\n  credible_level: 1.5\n", encoding="utf-8")
        with pytest.raises(ValueError):
            EraModelConfig(path)

    def test_negative_filter(self):
        with pytest.raises(ValueError):
            EraModelConfig(min_career_ip=-1)

"""ERA Model Config Loader."""
from pathlib import Path
from typing import Any

import yaml

from src.engine.era_config import (
    CREDIBLE_LEVEL,
    FIT_SCALE,
    FIT_SCALES,
    MIN_CAREER_IP,
    MIN_PRIOR_IP,
    SAMPLE_SEEDS,
    SAMPLE_SIZE,
    START_YEAR,
)


class EraModelConfig:
    """YAML-based ERA model configuration.

    Missing keys fall back to the constants in era_config. Keyword overrides
    (e.g. from CLI flags) win over the file.
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "era_model_config.yaml"

    def __init__(self, config_path: Path | str | None = None, **overrides: Any):
        path = Path(config_path) if config_path else self.DEFAULT_CONFIG_PATH
        with open(path, encoding="utf-8") as f:
            self._config = yaml.safe_load(f) or {}
        self._overrides = {k: v for k, v in overrides.items() if v is not None}
        self._validate()

    def _get(self, section: str, key: str, default: Any) -> Any:
        if key in self._overrides:
            return self._overrides[key]
        return self._config.get(section, {}).get(key, default)

    def _validate(self) -> None:
        if self.fit_scale not in FIT_SCALES:
            raise ValueError(f"Unknown fit_scale '{self.fit_scale}' (expected one of {sorted(FIT_SCALES)})")
        if not 0.0 < self.credible_level < 1.0:
            raise ValueError(f"credible_level must be in (0, 1), got {self.credible_level}")
        if self.min_prior_ip < 0 or self.min_career_ip < 0:
            raise ValueError("IP filters must be non-negative")

    @property
    def version(self) -> str:
        return str(self._config.get("version", ""))

    @property
    def min_prior_ip(self) -> float:
        return float(self._get("filters", "min_prior_ip", MIN_PRIOR_IP))

    @property
    def min_career_ip(self) -> float:
        return float(self._get("filters", "min_career_ip", MIN_CAREER_IP))

    @property
    def start_year(self) -> int:
        return int(self._get("filters", "start_year", START_YEAR))

    @property
    def fit_scale(self) -> str:
        return self._get("prior", "fit_scale", FIT_SCALE)

    @property
    def credible_level(self) -> float:
        return float(self._get("posterior", "credible_level", CREDIBLE_LEVEL))

    @property
    def sample_size(self) -> int:
        return int(self._get("display", "sample_size", SAMPLE_SIZE))

    @property
    def sample_seeds(self) -> tuple[int, ...]:
        return tuple(int(s) for s in self._get("display", "sample_seeds", SAMPLE_SEEDS))

"""Empirical-Bayes ERA types.

PeriodSummary: per-player ER / IP totals for one period (first_year | career)
GammaPrior: Gamma(shape, rate) prior on the per-inning earned-run rate
PlayerPosterior: Gamma(shape + ER, rate + IP) posterior with ERA-scale summaries
EvaluationSummary: naive vs. Bayes squared-error table and RMSE
"""
from dataclasses import dataclass, field

import pandas as pd

from src.engine.era_config import ERA_SCALE, OUTS_PER_INNING


class EraModelError(Exception):
    """Base error for the ERA model."""


class DataError(EraModelError):
    """Malformed or missing input fields (rejected at ingestion)."""


class EstimationError(EraModelError):
    """Prior fitting or evaluation could not produce a defined result."""


class UndefinedRateError(EraModelError):
    """Innings pitched is zero, so the rate is undefined."""


def innings_from_outs(ipouts: float) -> float:
    return ipouts / OUTS_PER_INNING


@dataclass(frozen=True)
class PeriodSummary:
    """One player's aggregated counts for a period."""
    player_id: str
    period: str
    er: int
    ipouts: int

    @property
    def innings_pitched(self) -> float:
        return innings_from_outs(self.ipouts)

    @property
    def has_rate(self) -> bool:
        return self.ipouts > 0

    @property
    def era(self) -> float:
        if not self.has_rate:
            raise UndefinedRateError(f"{self.player_id} has no {self.period} innings")
        return ERA_SCALE * self.er / self.innings_pitched


@dataclass(frozen=True)
class GammaPrior:
    """Gamma prior on the per-inning rate (mean = shape / rate).

    Written once per run and shared read-only by every posterior.
    """
    shape: float
    rate: float
    n_players: int = 0
    sample_mean: float = float('nan')
    sample_var: float = float('nan')
    fit_scale: str = 'rate'

    def __post_init__(self):
        if not (self.shape > 0 and self.rate > 0):
            raise EstimationError(
                f"Gamma prior requires positive parameters (shape={self.shape}, rate={self.rate})"
            )

    @property
    def mean(self) -> float:
        return self.shape / self.rate

    @property
    def variance(self) -> float:
        return self.shape / self.rate ** 2

    @property
    def era_mean(self) -> float:
        return ERA_SCALE * self.mean


@dataclass(frozen=True)
class PlayerPosterior:
    """Posterior Gamma(shape, rate) for one player, summaries on the ERA scale."""
    player_id: str
    shape: float
    rate: float
    er: int
    ip: float
    era_median: float
    era_lower: float
    era_upper: float

    @property
    def era_mean(self) -> float:
        return ERA_SCALE * self.shape / self.rate

    @property
    def raw_era(self) -> float:
        if self.ip <= 0:
            raise UndefinedRateError(f"{self.player_id} has no innings")
        return ERA_SCALE * self.er / self.ip

    @property
    def interval_width(self) -> float:
        return self.era_upper - self.era_lower


@dataclass
class EvaluationSummary:
    """Naive vs. Bayes comparison over the qualifying players."""
    records: pd.DataFrame = field(default_factory=pd.DataFrame)
    rmse_naive: float = float('nan')
    rmse_bayes: float = float('nan')

    @property
    def n_players(self) -> int:
        return len(self.records)

    @property
    def rmse_improvement(self) -> float:
        return self.rmse_naive - self.rmse_bayes

    @property
    def bayes_wins(self) -> int:
        """Players whose Bayes squared error is strictly smaller."""
        if self.records.empty:
            return 0
        return int((self.records['se_diff'] > 0).sum())

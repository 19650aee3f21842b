"""
Posterior Engine — Gamma-Poisson conjugate update

핵심 공식:
  shape_i = shape_0 + ER_i
  rate_i  = rate_0 + IP_i
  median  = 9 × GammaInv(0.5; shape_i, rate_i)
  lower   = 9 × GammaInv(0.025; shape_i, rate_i)
  upper   = 9 × GammaInv(0.975; shape_i, rate_i)
  shrinkage = rate_0 / (rate_0 + IP_i)   (weight on the prior mean)

Each player depends only on the shared prior and their own ER / IP, so the
whole first-year table is updated in one vectorized pass. The ×9 factor is
applied to the quantiles, never inside the update.
"""

import logging

import numpy as np
import pandas as pd
from scipy import stats as sp_stats

from src.engine.era_config import CREDIBLE_LEVEL, ERA_SCALE, MEDIAN_PROB
from src.engine.era_types import GammaPrior, PlayerPosterior

logger = logging.getLogger(__name__)

POSTERIOR_COLUMNS = [
    'player_id', 'er', 'ip', 'raw_era',
    'shape', 'rate',
    'era_median', 'era_lower', 'era_upper', 'era_mean',
    'interval_width', 'shrinkage',
]


def interval_probs(credible_level: float = CREDIBLE_LEVEL) -> tuple[float, float]:
    """Equal-tailed interval probabilities, e.g. 0.95 → (0.025, 0.975)."""
    tail = (1.0 - credible_level) / 2.0
    return tail, 1.0 - tail


def update_posterior(prior: GammaPrior, er, ip):
    """Conjugate update. Works on scalars or numpy arrays."""
    return prior.shape + er, prior.rate + ip


def gamma_quantiles(shape, rate, probs):
    """Inverse CDF of Gamma(shape, rate) at probs (rate parameterization)."""
    return sp_stats.gamma.ppf(probs, a=shape, scale=1.0 / np.asarray(rate, dtype=float))


def prior_era_median(prior: GammaPrior) -> float:
    """Posterior median with no data (ER = 0, IP = 0)."""
    return float(ERA_SCALE * gamma_quantiles(prior.shape, prior.rate, MEDIAN_PROB))


def compute_posterior(
    prior: GammaPrior,
    player_id: str,
    er: int,
    ip: float,
    credible_level: float = CREDIBLE_LEVEL,
) -> PlayerPosterior:
    """단일 선수 posterior."""
    shape, rate = update_posterior(prior, er, ip)
    lo, hi = interval_probs(credible_level)
    q_lower, q_median, q_upper = gamma_quantiles(shape, rate, [lo, MEDIAN_PROB, hi])
    return PlayerPosterior(
        player_id=player_id,
        shape=float(shape),
        rate=float(rate),
        er=int(er),
        ip=float(ip),
        era_median=float(ERA_SCALE * q_median),
        era_lower=float(ERA_SCALE * q_lower),
        era_upper=float(ERA_SCALE * q_upper),
    )


class PosteriorEngine:
    """Applies one shared prior to every first-year summary."""

    def __init__(self, prior: GammaPrior, credible_level: float = CREDIBLE_LEVEL):
        self.prior = prior
        self.credible_level = credible_level

    def process(self, first_year: pd.DataFrame) -> pd.DataFrame:
        """
        첫 시즌 요약 전체 (필터 없음) → posterior DataFrame.

        first_year 컬럼: player_id, er, ip (ip > 0, aggregator 보장)
        """
        if first_year.empty:
            logger.info("  No first-year summaries, no posteriors")
            return pd.DataFrame(columns=POSTERIOR_COLUMNS)

        er = first_year['er'].to_numpy(dtype=float)
        ip = first_year['ip'].to_numpy(dtype=float)
        shape, rate = update_posterior(self.prior, er, ip)

        lo, hi = interval_probs(self.credible_level)
        out = pd.DataFrame({
            'player_id': first_year['player_id'].to_numpy(),
            'er': first_year['er'].to_numpy(dtype=int),
            'ip': ip,
        })
        out['raw_era'] = ERA_SCALE * er / ip
        out['shape'] = shape
        out['rate'] = rate
        out['era_median'] = ERA_SCALE * gamma_quantiles(shape, rate, MEDIAN_PROB)
        out['era_lower'] = ERA_SCALE * gamma_quantiles(shape, rate, lo)
        out['era_upper'] = ERA_SCALE * gamma_quantiles(shape, rate, hi)
        out['era_mean'] = ERA_SCALE * shape / rate
        out['interval_width'] = out['era_upper'] - out['era_lower']
        out['shrinkage'] = self.prior.rate / rate

        logger.info(f"  Computed {len(out):,} posteriors ({self.credible_level:.0%} intervals)")
        return out[POSTERIOR_COLUMNS]

    def get_posteriors(self, first_year: pd.DataFrame) -> list[PlayerPosterior]:
        """PlayerPosterior 레코드 리스트."""
        df = self.process(first_year)
        return [
            PlayerPosterior(
                player_id=row.player_id,
                shape=float(row.shape),
                rate=float(row.rate),
                er=int(row.er),
                ip=float(row.ip),
                era_median=float(row.era_median),
                era_lower=float(row.era_lower),
                era_upper=float(row.era_upper),
            )
            for row in df.itertuples(index=False)
        ]

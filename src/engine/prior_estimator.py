"""
Prior Estimator — method-of-moments Gamma prior

Gamma moment identities:
  mean     = shape / rate
  variance = shape / rate²

Substituting shape = m·r into the variance identity gives

  m·r − v·r² = 0

whose non-trivial root is r = m / v, and shape = m·r.

The default fit uses the per-inning rate ER / IP, the scale of the Poisson
likelihood, so the conjugate update (shape + ER, rate + IP) needs no
rescaling. fit_scale='era' fits on 9·ER/IP instead; variance scales by 81
there, so that prior is not equivalent and is kept only for comparison.
"""

import logging
import math

import numpy as np
import pandas as pd

from src.engine.era_config import ERA_SCALE, FIT_SCALE, FIT_SCALES, MIN_PRIOR_IP
from src.engine.era_types import EstimationError, GammaPrior

logger = logging.getLogger(__name__)


def solve_moment_rate(mean: float, var: float) -> float:
    """Positive root of m·r − v·r² = 0.

    Raises:
        EstimationError: variance not positive/finite, or no positive root.
    """
    if not (math.isfinite(mean) and math.isfinite(var)):
        raise EstimationError(f"Non-finite moments (mean={mean}, var={var})")
    if var <= 0:
        raise EstimationError(f"Degenerate data: sample variance is {var}")
    # roots are 0 and m / v
    rate = mean / var
    if rate <= 0:
        raise EstimationError(f"No positive root (mean={mean}, var={var})")
    return rate


def fit_gamma_prior(
    first_year: pd.DataFrame,
    min_ip: float = MIN_PRIOR_IP,
    fit_scale: str = FIT_SCALE,
) -> GammaPrior:
    """첫 시즌 요약에서 Gamma prior 추정.

    Args:
        first_year: player_id, er, ip 컬럼 (first_year 요약)
        min_ip: ip > min_ip 인 선수만 사용
        fit_scale: 'rate' (ER/IP) 또는 'era' (9·ER/IP)

    Returns:
        GammaPrior(shape, rate)

    Raises:
        EstimationError: 필터 후 2명 미만, 분산 <= 0, 양의 근 없음
    """
    if fit_scale not in FIT_SCALES:
        raise ValueError(f"Unknown fit_scale '{fit_scale}'")

    qualified = first_year[first_year['ip'] > min_ip]
    n = len(qualified)
    if n < 2:
        raise EstimationError(
            f"Prior estimation needs at least 2 players with IP > {min_ip}, got {n}"
        )

    values = qualified['er'].to_numpy(dtype=float) / qualified['ip'].to_numpy(dtype=float)
    if fit_scale == 'era':
        values = values * ERA_SCALE

    mean = float(np.mean(values))
    var = float(np.var(values, ddof=1))
    rate = solve_moment_rate(mean, var)
    shape = mean * rate

    prior = GammaPrior(
        shape=shape,
        rate=rate,
        n_players=n,
        sample_mean=mean,
        sample_var=var,
        fit_scale=fit_scale,
    )
    logger.info(
        f"  Prior ({fit_scale} scale, n={n:,}): shape={shape:.4f}, rate={rate:.4f}, "
        f"mean={mean:.4f}, var={var:.4f}"
    )
    return prior

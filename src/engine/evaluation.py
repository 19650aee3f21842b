"""
Evaluation Engine — naive vs. Bayes first-year ERA as predictors of career ERA

  naive_se = (career_era − raw_era)²
  bayes_se = (career_era − era_median)²
  se_diff  = naive_se − bayes_se      (> 0 → Bayes closer)
  RMSE     = sqrt(mean(se))

Inner join: only players with both a first-year posterior and a career
summary with ip > min_career_ip are scored. This favors longer careers.
"""

import logging

import numpy as np
import pandas as pd

from src.engine.era_config import MIN_CAREER_IP
from src.engine.era_types import EstimationError, EvaluationSummary

logger = logging.getLogger(__name__)

EVALUATION_COLUMNS = [
    'player_id', 'first_ip', 'career_ip',
    'career_era', 'naive_era', 'bayes_era',
    'naive_se', 'bayes_se', 'se_diff',
]


def rmse(squared_errors) -> float:
    return float(np.sqrt(np.mean(squared_errors)))


def evaluate(
    posteriors: pd.DataFrame,
    career: pd.DataFrame,
    min_career_ip: float = MIN_CAREER_IP,
) -> EvaluationSummary:
    """Posterior + career 요약 join → squared error 테이블 + RMSE.

    Args:
        posteriors: PosteriorEngine.process() 결과 (player_id, ip, raw_era, era_median)
        career: career 요약 (player_id, ip, era)
        min_career_ip: career ip > min_career_ip 인 선수만 평가

    Raises:
        EstimationError: join 결과가 비어 있음
    """
    qualified = career[career['ip'] > min_career_ip]
    joined = posteriors[['player_id', 'ip', 'raw_era', 'era_median']].merge(
        qualified[['player_id', 'ip', 'era']],
        on='player_id',
        how='inner',
        suffixes=('_first', '_career'),
    )
    if joined.empty:
        raise EstimationError(
            f"No players with both a first-year posterior and career IP > {min_career_ip}"
        )

    records = pd.DataFrame({
        'player_id': joined['player_id'],
        'first_ip': joined['ip_first'],
        'career_ip': joined['ip_career'],
        'career_era': joined['era'],
        'naive_era': joined['raw_era'],
        'bayes_era': joined['era_median'],
    })
    records['naive_se'] = (records['career_era'] - records['naive_era']) ** 2
    records['bayes_se'] = (records['career_era'] - records['bayes_era']) ** 2
    records['se_diff'] = records['naive_se'] - records['bayes_se']
    records = records.sort_values('player_id').reset_index(drop=True)

    summary = EvaluationSummary(
        records=records[EVALUATION_COLUMNS],
        rmse_naive=rmse(records['naive_se']),
        rmse_bayes=rmse(records['bayes_se']),
    )
    logger.info(
        f"  Evaluated {summary.n_players:,} players: "
        f"RMSE naive={summary.rmse_naive:.4f}, bayes={summary.rmse_bayes:.4f}"
    )
    return summary


def rank_improvements(records: pd.DataFrame, n: int | None = None, ascending: bool = False) -> pd.DataFrame:
    """se_diff 기준 정렬.

    ascending=False: Bayes가 가장 많이 개선한 선수
    ascending=True:  Bayes가 가장 많이 악화시킨 선수
    """
    ranked = records.sort_values(
        ['se_diff', 'player_id'], ascending=[ascending, True], kind='mergesort'
    ).reset_index(drop=True)
    return ranked if n is None else ranked.head(n)

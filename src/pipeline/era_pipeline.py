"""ERA Pipeline — 첫 시즌 ERA empirical-Bayes 추정 + 커리어 ERA 평가 오케스트레이터.

Flow:
    1. Start-year filter + validation (DataError on bad rows)
    2. Aggregate: season rows → first_year / career summaries
    3. Prior: Gamma method-of-moments on first_year (ip > min_prior_ip)
    4. Posterior: shared prior applied to every first_year summary
    5. Evaluation: join with career (ip > min_career_ip), squared error, RMSE

Each stage consumes the complete output of the previous one. The run is a
pure function of the seasons table and the config.
"""

import logging
from dataclasses import dataclass

import pandas as pd

from src.engine.era_model_config import EraModelConfig
from src.engine.era_types import EvaluationSummary, GammaPrior
from src.engine.evaluation import evaluate
from src.engine.posterior_engine import PosteriorEngine, prior_era_median
from src.engine.prior_estimator import fit_gamma_prior
from src.engine.record_aggregator import aggregate_periods
from src.etl.season_records import filter_start_year, validate_season_records

logger = logging.getLogger(__name__)


@dataclass
class EraRunResult:
    """한 번의 파이프라인 실행 결과."""
    first_year: pd.DataFrame
    career: pd.DataFrame
    prior: GammaPrior
    posteriors: pd.DataFrame
    evaluation: EvaluationSummary

    @property
    def prior_median_era(self) -> float:
        return prior_era_median(self.prior)

    def to_dict(self) -> dict:
        return {
            'first_year_players': len(self.first_year),
            'career_players': len(self.career),
            'prior_shape': self.prior.shape,
            'prior_rate': self.prior.rate,
            'prior_players': self.prior.n_players,
            'posteriors': len(self.posteriors),
            'evaluated_players': self.evaluation.n_players,
            'rmse_naive': self.evaluation.rmse_naive,
            'rmse_bayes': self.evaluation.rmse_bayes,
        }


def prepare_seasons(seasons: pd.DataFrame, start_year: int) -> pd.DataFrame:
    """연도 필터 후 검증. 필터가 먼저라 범위 밖 결측 행은 검증 대상이 아님."""
    if 'year' not in seasons.columns:
        return validate_season_records(seasons)
    year = pd.to_numeric(seasons['year'], errors='coerce')
    in_range = seasons[year.isna() | (year >= start_year)]
    return filter_start_year(validate_season_records(in_range), start_year)


def run_era_pipeline(seasons: pd.DataFrame, config: EraModelConfig | None = None) -> EraRunResult:
    """메인 파이프라인.

    Args:
        seasons: player_id, year, er, ipouts (+ stint) 시즌 기록
        config: None이면 기본 YAML 설정

    Raises:
        DataError: 입력 검증 실패
        EstimationError: prior 추정 또는 평가 불가
    """
    config = config or EraModelConfig()
    logger.info(
        f"=== ERA Pipeline: start_year={config.start_year}, "
        f"min_prior_ip={config.min_prior_ip}, min_career_ip={config.min_career_ip} ==="
    )

    # 1. Filter + validate
    clean = prepare_seasons(seasons, config.start_year)

    # 2. Aggregate
    first_year, career = aggregate_periods(clean)

    # 3. Prior (published once, read-only afterwards)
    prior = fit_gamma_prior(first_year, min_ip=config.min_prior_ip, fit_scale=config.fit_scale)

    # 4. Posterior
    engine = PosteriorEngine(prior, credible_level=config.credible_level)
    posteriors = engine.process(first_year)

    # 5. Evaluation
    evaluation = evaluate(posteriors, career, min_career_ip=config.min_career_ip)

    result = EraRunResult(
        first_year=first_year,
        career=career,
        prior=prior,
        posteriors=posteriors,
        evaluation=evaluation,
    )
    logger.info(f"  === Done: {result.to_dict()} ===")
    return result

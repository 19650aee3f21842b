"""Report tables — 출력용 테이블 변환 (렌더링 없음).

Random samples here are illustrative only and never feed back into estimation.
"""

import pandas as pd

from src.engine.era_config import SAMPLE_SIZE, SAMPLE_SEEDS


def attach_names(df: pd.DataFrame, people: pd.DataFrame) -> pd.DataFrame:
    """player_id 기준으로 이름 컬럼 추가. 이름 없는 선수는 빈 문자열."""
    named = df.merge(
        people[['player_id', 'first_name', 'last_name', 'full_name']],
        on='player_id',
        how='left',
    )
    for col in ('first_name', 'last_name', 'full_name'):
        named[col] = named[col].fillna('')
    cols = ['player_id', 'full_name'] + [c for c in df.columns if c != 'player_id']
    return named[cols + ['first_name', 'last_name']]


def top_by(df: pd.DataFrame, column: str, n: int = 10, ascending: bool = False) -> pd.DataFrame:
    """column 기준 상위 n개 (동률은 player_id 순)."""
    return (
        df.sort_values([column, 'player_id'], ascending=[ascending, True], kind='mergesort')
        .head(n)
        .reset_index(drop=True)
    )


def sample_players(df: pd.DataFrame, n: int = SAMPLE_SIZE, seed: int = SAMPLE_SEEDS[0]) -> pd.DataFrame:
    """고정 seed 랜덤 샘플 (n > 행 수면 전체)."""
    n = min(n, len(df))
    return df.sample(n=n, random_state=seed).reset_index(drop=True)


def credible_interval_frame(posteriors: pd.DataFrame) -> pd.DataFrame:
    """Interval plot용: lower / median / upper + raw ERA + IP, median 순 정렬."""
    frame = posteriors[['player_id', 'era_lower', 'era_median', 'era_upper', 'raw_era', 'ip']].rename(
        columns={'era_lower': 'lower', 'era_median': 'median', 'era_upper': 'upper'}
    )
    return frame.sort_values(['median', 'player_id'], kind='mergesort').reset_index(drop=True)


def format_prior(prior) -> str:
    text = (
        f"Gamma prior ({prior.fit_scale} scale, n={prior.n_players:,}): "
        f"shape={prior.shape:.3f}, rate={prior.rate:.3f}"
    )
    # era-scale fit: shape / rate is already an ERA
    mean_era = prior.era_mean if prior.fit_scale == 'rate' else prior.mean
    return f"{text}, mean ERA={mean_era:.2f}"


def format_summary(result) -> str:
    """EraRunResult 텍스트 요약."""
    ev = result.evaluation
    lines = [
        "=" * 60,
        "EMPIRICAL-BAYES FIRST-YEAR ERA SUMMARY",
        "=" * 60,
        f"First-year summaries: {len(result.first_year):,}",
        f"Career summaries:     {len(result.career):,}",
        format_prior(result.prior),
        f"Prior median ERA (no data): {result.prior_median_era:.2f}",
        "",
        f"Evaluated players: {ev.n_players:,}",
        f"  RMSE naive: {ev.rmse_naive:.4f}",
        f"  RMSE bayes: {ev.rmse_bayes:.4f}",
        f"  Improvement: {ev.rmse_improvement:+.4f}",
        f"  Bayes closer for {ev.bayes_wins:,} / {ev.n_players:,} players",
    ]
    return "\n".join(lines)

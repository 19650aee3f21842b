"""
Record Aggregator — 시즌별 투구 기록 → 선수별 기간 요약

Per-season pitching rows (one row per player/year/stint) are reduced to one
row per player for a period:

  year_number = year - min(year of player) + 1
  first_year  : year_number == 1
  career      : year_number > 1
  ip          = sum(ipouts) / 3
  era         = 9 × sum(er) / ip

Players with no rows in a period produce no record. Summaries with ip == 0
have no defined rate and are dropped here.
"""

import logging

import pandas as pd

from src.engine.era_config import (
    ERA_SCALE,
    OUTS_PER_INNING,
    PERIOD_CAREER,
    PERIOD_FIRST_YEAR,
    PERIODS,
)
from src.engine.era_types import PeriodSummary

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ['player_id', 'period', 'er', 'ipouts', 'ip', 'era']


def add_year_number(seasons: pd.DataFrame) -> pd.DataFrame:
    """선수별 데뷔 기준 연차 (1 = 첫 시즌) 컬럼 추가.

    Depends only on each player's own set of years, not on row order.
    """
    out = seasons.copy()
    debut = out.groupby('player_id')['year'].transform('min')
    out['year_number'] = (out['year'] - debut + 1).astype(int)
    return out


def _select_period(seasons: pd.DataFrame, period: str) -> pd.DataFrame:
    if period == PERIOD_FIRST_YEAR:
        return seasons[seasons['year_number'] == 1]
    return seasons[seasons['year_number'] > 1]


def aggregate_period(seasons: pd.DataFrame, period: str) -> pd.DataFrame:
    """기간별 선수 요약 (player_id, period, er, ipouts, ip, era).

    Args:
        seasons: player_id, year, er, ipouts 컬럼. year_number가 없으면 계산.
        period: 'first_year' 또는 'career' (첫 시즌 제외 나머지)

    Returns:
        player_id 순으로 정렬된 DataFrame. ip == 0 인 선수는 제외.
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown period '{period}' (expected one of {sorted(PERIODS)})")

    if 'year_number' not in seasons.columns:
        seasons = add_year_number(seasons)

    rows = _select_period(seasons, period)
    if rows.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    summary = (
        rows.groupby('player_id', sort=True)[['er', 'ipouts']]
        .sum()
        .reset_index()
    )
    summary['er'] = summary['er'].astype(int)
    summary['ipouts'] = summary['ipouts'].astype(int)

    # ip == 0 → rate undefined
    undefined = summary['ipouts'] <= 0
    if undefined.any():
        logger.info(f"  {period}: dropped {int(undefined.sum()):,} players with 0 IP")
        summary = summary[~undefined].copy()

    summary['period'] = period
    summary['ip'] = summary['ipouts'] / OUTS_PER_INNING
    summary['era'] = ERA_SCALE * summary['er'] / summary['ip']

    return summary[SUMMARY_COLUMNS].reset_index(drop=True)


def aggregate_periods(seasons: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    """첫 시즌 요약 + 나머지 커리어 요약."""
    numbered = add_year_number(seasons)
    first_year = aggregate_period(numbered, PERIOD_FIRST_YEAR)
    career = aggregate_period(numbered, PERIOD_CAREER)
    logger.info(
        f"  Aggregated {len(first_year):,} first-year and {len(career):,} career summaries "
        f"from {len(seasons):,} season rows"
    )
    return first_year, career


def to_period_summaries(summary_df: pd.DataFrame) -> list[PeriodSummary]:
    """Summary DataFrame → PeriodSummary 리스트."""
    return [
        PeriodSummary(
            player_id=row.player_id,
            period=row.period,
            er=int(row.er),
            ipouts=int(row.ipouts),
        )
        for row in summary_df.itertuples(index=False)
    ]

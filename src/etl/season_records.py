"""Season 기록 검증 + 연도 필터.

모델 코어는 검증된 음이 아닌 정수 카운트만 받는다. 잘못된 행은 여기서 DataError.
"""

import logging

import numpy as np
import pandas as pd

from src.engine.era_config import START_YEAR
from src.engine.era_types import DataError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['player_id', 'year', 'er', 'ipouts']
COUNT_COLUMNS = ['year', 'er', 'ipouts']


def validate_season_records(seasons: pd.DataFrame) -> pd.DataFrame:
    """필수 컬럼 / 숫자 / 정수 / 음수 검사 후 정수형으로 변환한 복사본 반환.

    Raises:
        DataError: 컬럼 누락, 결측, 숫자 아님, 비정수, 음수
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in seasons.columns]
    if missing:
        raise DataError(f"Missing columns: {missing}")

    out = seasons.copy()
    if out['player_id'].isna().any():
        raise DataError(f"{int(out['player_id'].isna().sum())} rows without player_id")
    out['player_id'] = out['player_id'].astype(str)

    for col in COUNT_COLUMNS:
        values = pd.to_numeric(out[col], errors='coerce')
        bad = values.isna()
        if bad.any():
            sample = out.loc[bad, 'player_id'].head(3).tolist()
            raise DataError(f"{int(bad.sum())} rows with missing/non-numeric '{col}' (e.g. {sample})")
        if (values < 0).any():
            raise DataError(f"{int((values < 0).sum())} rows with negative '{col}'")
        if not np.all(np.mod(values, 1) == 0):
            raise DataError(f"Non-integer values in '{col}'")
        out[col] = values.astype(int)

    return out


def filter_start_year(seasons: pd.DataFrame, start_year: int = START_YEAR) -> pd.DataFrame:
    """start_year 이후 시즌만 유지."""
    out = seasons[seasons['year'] >= start_year].reset_index(drop=True)
    logger.info(f"  Start year {start_year}: {len(out):,} / {len(seasons):,} season rows")
    return out

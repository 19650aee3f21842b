"""Lahman Pitching / People 테이블 로드 (로컬 CSV 또는 pybaseball)."""

import logging
import os

import pandas as pd
from pybaseball import lahman

logger = logging.getLogger(__name__)

PITCHING_COLUMN_MAP = {
    'playerID': 'player_id',
    'yearID': 'year',
    'stint': 'stint',
    'ER': 'er',
    'IPouts': 'ipouts',
}

PEOPLE_COLUMN_MAP = {
    'playerID': 'player_id',
    'nameFirst': 'first_name',
    'nameLast': 'last_name',
}

PITCHING_CSV = 'Pitching.csv'
PEOPLE_CSV = 'People.csv'


def load_pitching_csv(path: str) -> pd.DataFrame:
    """Lahman Pitching.csv 원본 로드."""
    df = pd.read_csv(path)
    logger.info(f"Loaded {len(df):,} pitching rows from {path}")
    return df


def load_people_csv(path: str) -> pd.DataFrame:
    """Lahman People.csv 원본 로드."""
    df = pd.read_csv(path, encoding='latin-1')
    logger.info(f"Loaded {len(df):,} people rows from {path}")
    return df


def fetch_lahman_pitching() -> pd.DataFrame:
    """pybaseball로 Lahman Pitching 테이블 다운로드."""
    logger.info("Fetching Lahman pitching table...")
    df = lahman.pitching()
    if df is None or df.empty:
        logger.info("  No pitching data returned")
        return pd.DataFrame(columns=list(PITCHING_COLUMN_MAP))
    logger.info(f"  {len(df):,} pitching rows")
    return df


def fetch_lahman_people() -> pd.DataFrame:
    """pybaseball로 Lahman People 테이블 다운로드."""
    logger.info("Fetching Lahman people table...")
    df = lahman.people()
    if df is None or df.empty:
        logger.info("  No people data returned")
        return pd.DataFrame(columns=list(PEOPLE_COLUMN_MAP))
    logger.info(f"  {len(df):,} people rows")
    return df


def normalize_pitching(raw: pd.DataFrame) -> pd.DataFrame:
    """Lahman 컬럼명 → player_id, year, stint, er, ipouts."""
    columns = [c for c in PITCHING_COLUMN_MAP if c in raw.columns]
    out = raw[columns].rename(columns=PITCHING_COLUMN_MAP)
    if 'stint' not in out.columns:
        out['stint'] = 1
    return out.reset_index(drop=True)


def normalize_people(raw: pd.DataFrame) -> pd.DataFrame:
    """Lahman People → player_id, first_name, last_name, full_name."""
    out = raw[list(PEOPLE_COLUMN_MAP)].rename(columns=PEOPLE_COLUMN_MAP)
    out['first_name'] = out['first_name'].fillna('').astype(str)
    out['last_name'] = out['last_name'].fillna('').astype(str)
    out['full_name'] = (out['first_name'] + ' ' + out['last_name']).str.strip()
    return out.drop_duplicates('player_id').reset_index(drop=True)


def load_lahman_tables(data_dir: str | None = None) -> tuple[pd.DataFrame, pd.DataFrame]:
    """(pitching, people) 정규화 테이블.

    data_dir가 있으면 Pitching.csv / People.csv를 읽고, 없으면 pybaseball로 다운로드.
    """
    if data_dir:
        pitching_raw = load_pitching_csv(os.path.join(data_dir, PITCHING_CSV))
        people_raw = load_people_csv(os.path.join(data_dir, PEOPLE_CSV))
    else:
        pitching_raw = fetch_lahman_pitching()
        people_raw = fetch_lahman_people()
    return normalize_pitching(pitching_raw), normalize_people(people_raw)

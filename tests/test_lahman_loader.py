"""Lahman 로더 테스트 (pybaseball mock)."""

from unittest.mock import patch

import pandas as pd

from src.etl.lahman_loader import (
    fetch_lahman_pitching,
    load_lahman_tables,
    normalize_people,
    normalize_pitching,
)


def _make_raw_pitching():
    return pd.DataFrame([
        {'playerID': 'kershcl01', 'yearID': 2008, 'stint': 1, 'teamID': 'LAN',
         'W': 5, 'L': 5, 'ER': 52, 'IPouts': 323, 'ERA': 4.26},
        {'playerID': 'kershcl01', 'yearID': 2009, 'stint': 1, 'teamID': 'LAN',
         'W': 8, 'L': 8, 'ER': 62, 'IPouts': 514, 'ERA': 2.79},
    ])


def _make_raw_people():
    return pd.DataFrame([
        {'playerID': 'kershcl01', 'nameFirst': 'Clayton', 'nameLast': 'Kershaw', 'bats': 'L'},
        {'playerID': 'mysteryx01', 'nameFirst': None, 'nameLast': 'Unknown', 'bats': 'R'},
    ])


def test_normalize_pitching_columns():
    out = normalize_pitching(_make_raw_pitching())
    assert list(out.columns) == ['player_id', 'year', 'stint', 'er', 'ipouts']
    assert out.loc[1, 'ipouts'] == 514


def test_normalize_pitching_without_stint():
    raw = _make_raw_pitching().drop(columns=['stint'])
    out = normalize_pitching(raw)
    assert list(out['stint']) == [1, 1]


def test_normalize_people_full_name():
    out = normalize_people(_make_raw_people()).set_index('player_id')
    assert out.loc['kershcl01', 'full_name'] == 'Clayton Kershaw'
    assert out.loc['mysteryx01', 'first_name'] == ''
    assert out.loc['mysteryx01', 'full_name'] == 'Unknown'


def test_load_from_csv_dir(tmp_path):
    _make_raw_pitching().to_csv(tmp_path / 'Pitching.csv', index=False)
    _make_raw_people().to_csv(tmp_path / 'People.csv', index=False)

    seasons, people = load_lahman_tables(str(tmp_path))
    assert len(seasons) == 2
    assert set(people['player_id']) == {'kershcl01', 'mysteryx01'}


@patch('src.etl.lahman_loader.lahman.people')
@patch('src.etl.lahman_loader.lahman.pitching')
def test_fetch_with_pybaseball(mock_pitching, mock_people):
    mock_pitching.return_value = _make_raw_pitching()
    mock_people.return_value = _make_raw_people()

    seasons, people = load_lahman_tables()
    mock_pitching.assert_called_once()
    mock_people.assert_called_once()
    assert seasons.loc[0, 'player_id'] == 'kershcl01'
    assert len(people) == 2


@patch('src.etl.lahman_loader.lahman.pitching')
def test_fetch_empty(mock_pitching):
    mock_pitching.return_value = pd.DataFrame()
    df = fetch_lahman_pitching()
    assert df.empty
    assert 'IPouts' in df.columns

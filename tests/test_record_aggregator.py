"""Record Aggregator 테스트 — 연차 계산 + 기간별 요약."""

import pandas as pd
import pytest

from src.engine.era_types import PeriodSummary, UndefinedRateError
from src.engine.record_aggregator import (
    SUMMARY_COLUMNS,
    add_year_number,
    aggregate_period,
    aggregate_periods,
    to_period_summaries,
)


def _make_seasons(rows):
    return pd.DataFrame(rows, columns=['player_id', 'year', 'stint', 'er', 'ipouts'])


SEASONS = _make_seasons([
    ('aaa01', 1990, 1, 10, 90),
    ('aaa01', 1990, 2, 5, 30),      # second stint, same season
    ('aaa01', 1991, 1, 40, 540),
    ('aaa01', 1993, 1, 20, 300),
    ('bbb01', 2001, 1, 3, 27),      # one season only
    ('ccc01', 1985, 1, 0, 0),       # debut without an out recorded
    ('ccc01', 1986, 1, 12, 120),
])


def test_year_number_relative_to_debut():
    out = add_year_number(SEASONS)
    got = dict(zip(zip(out['player_id'], out['year']), out['year_number']))
    assert got[('aaa01', 1990)] == 1
    assert got[('aaa01', 1991)] == 2
    assert got[('aaa01', 1993)] == 4  # gap seasons still count
    assert got[('bbb01', 2001)] == 1
    assert got[('ccc01', 1986)] == 2


def test_year_number_does_not_mutate_input():
    before = SEASONS.copy()
    add_year_number(SEASONS)
    pd.testing.assert_frame_equal(SEASONS, before)


def test_first_year_sums_stints():
    first = aggregate_period(SEASONS, 'first_year').set_index('player_id')
    assert first.loc['aaa01', 'er'] == 15
    assert first.loc['aaa01', 'ipouts'] == 120
    assert first.loc['aaa01', 'ip'] == pytest.approx(40.0)
    assert first.loc['aaa01', 'era'] == pytest.approx(9 * 15 / 40)


def test_first_year_zero_ip_produces_no_record():
    """IP 0 → rate 미정의 → 레코드 없음 (0 ERA 아님)."""
    first = aggregate_period(SEASONS, 'first_year')
    assert 'ccc01' not in set(first['player_id'])


def test_career_excludes_first_year():
    career = aggregate_period(SEASONS, 'career').set_index('player_id')
    assert career.loc['aaa01', 'er'] == 60
    assert career.loc['aaa01', 'ip'] == pytest.approx(280.0)
    assert career.loc['ccc01', 'era'] == pytest.approx(9 * 12 / 40)


def test_career_missing_for_single_season_player():
    career = aggregate_period(SEASONS, 'career')
    assert 'bbb01' not in set(career['player_id'])


def test_output_columns_and_period_tag():
    first = aggregate_period(SEASONS, 'first_year')
    assert list(first.columns) == SUMMARY_COLUMNS
    assert set(first['period']) == {'first_year'}


def test_order_independent():
    """입력 순서와 무관하게 동일 결과."""
    shuffled = SEASONS.sample(frac=1.0, random_state=7).reset_index(drop=True)
    for period in ('first_year', 'career'):
        pd.testing.assert_frame_equal(
            aggregate_period(SEASONS, period),
            aggregate_period(shuffled, period),
        )


def test_empty_period_returns_empty_frame():
    only_debuts = SEASONS[SEASONS['player_id'] == 'bbb01']
    career = aggregate_period(only_debuts, 'career')
    assert career.empty
    assert list(career.columns) == SUMMARY_COLUMNS


def test_unknown_period_raises():
    with pytest.raises(ValueError):
        aggregate_period(SEASONS, 'rookie')


def test_aggregate_periods_pair():
    first, career = aggregate_periods(SEASONS)
    assert list(first['player_id']) == ['aaa01', 'bbb01']
    assert list(career['player_id']) == ['aaa01', 'ccc01']


def test_to_period_summaries():
    first = aggregate_period(SEASONS, 'first_year')
    summaries = to_period_summaries(first)
    assert summaries[0] == PeriodSummary(player_id='aaa01', period='first_year', er=15, ipouts=120)
    assert summaries[0].innings_pitched == pytest.approx(40.0)
    assert summaries[1].era == pytest.approx(3.0)


def test_period_summary_undefined_rate():
    s = PeriodSummary(player_id='ccc01', period='first_year', er=0, ipouts=0)
    assert not s.has_rate
    with pytest.raises(UndefinedRateError):
        _ = s.era

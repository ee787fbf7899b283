import numpy as np
import pandas as pd
import pytest

from data_engineering.clean import (
    choose_skew_transform, log_transform, sqrt_transform, correct_skew,
)


COUNTS = pd.Series([0, 1, 2, 2, 3, 20], name='trips_per_month')


def test_zero_minimum_picks_sqrt():
    assert choose_skew_transform(COUNTS) == 'sqrt'


def test_strictly_positive_picks_log():
    assert choose_skew_transform(COUNTS + 1) == 'log'


def test_log_rejected_when_zero_present():
    with pytest.raises(ValueError, match='log transform'):
        log_transform(COUNTS)


def test_negative_counts_rejected():
    with pytest.raises(ValueError):
        choose_skew_transform(pd.Series([-1, 2, 3]))
    with pytest.raises(ValueError):
        sqrt_transform(pd.Series([-1.0, 4.0]))


def test_all_missing_rejected():
    with pytest.raises(ValueError):
        choose_skew_transform(pd.Series([np.nan, np.nan]))


def test_correct_skew_adds_sqrt_column():
    df = pd.DataFrame({'trips_per_month': COUNTS})
    out = correct_skew(df, 'trips_per_month')

    assert 'trips_per_month_sqrt' in out.columns
    assert out['trips_per_month_sqrt'].tolist() == pytest.approx(np.sqrt(COUNTS).tolist())
    assert 'trips_per_month_sqrt' not in df.columns


def test_correct_skew_explicit_log_on_zeros_fails():
    df = pd.DataFrame({'trips_per_month': COUNTS})
    with pytest.raises(ValueError):
        correct_skew(df, 'trips_per_month', method='log')


def test_correct_skew_log_keeps_missing():
    df = pd.DataFrame({'x': [1.0, np.e, np.nan]})
    out = correct_skew(df, 'x', method='log')
    assert out['x_log'].iloc[1] == pytest.approx(1.0)
    assert np.isnan(out['x_log'].iloc[2])


def test_unknown_method():
    with pytest.raises(ValueError):
        correct_skew(pd.DataFrame({'x': [1, 2]}), 'x', method='boxcox')

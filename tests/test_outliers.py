import numpy as np
import pandas as pd
import pytest

from data_engineering.clean import (
    iqr_bounds, flag_outliers_iqr, outlier_report, cap_outliers, drop_outliers, mask_outliers,
)


COUNTS = pd.Series([0, 1, 2, 2, 3, 20], name='trips_per_month')


def test_iqr_bounds():
    bounds = iqr_bounds(COUNTS)
    assert bounds.q1 == pytest.approx(1.25)
    assert bounds.q3 == pytest.approx(2.75)
    assert bounds.iqr == pytest.approx(1.5)
    assert bounds.lower == pytest.approx(-1.0)
    assert bounds.upper == pytest.approx(5.0)


def test_flags_only_the_extreme_value():
    mask = flag_outliers_iqr(COUNTS)
    assert COUNTS[mask].tolist() == [20]


def test_missing_values_never_flagged():
    series = pd.Series([0, 1, 2, 2, 3, 20, np.nan])
    mask = flag_outliers_iqr(series)
    assert mask.dtype == bool
    assert not mask.iloc[-1]


def test_report_does_not_touch_data():
    df = pd.DataFrame({'trips_per_month': COUNTS, 'other': [1, 2, 3, 4, 5, 6]})
    before = df.copy()

    report = outlier_report(df, ['trips_per_month', 'other'])

    pd.testing.assert_frame_equal(df, before)
    by_col = report.set_index('column')
    assert by_col.loc['trips_per_month', 'n_outliers'] == 1
    assert by_col.loc['trips_per_month', 'outlier_values'] == [20]
    assert by_col.loc['other', 'n_outliers'] == 0


def test_manual_remediation():
    df = pd.DataFrame({'trips_per_month': COUNTS})

    assert cap_outliers(df, 'trips_per_month')['trips_per_month'].max() == pytest.approx(5.0)
    assert len(drop_outliers(df, 'trips_per_month')) == 5

    masked = mask_outliers(df, 'trips_per_month')
    assert masked['trips_per_month'].isna().sum() == 1
    assert df['trips_per_month'].isna().sum() == 0

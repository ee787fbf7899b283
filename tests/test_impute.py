import numpy as np
import pandas as pd
import pytest

from data_engineering.impute import (
    ImputationError, column_mode, impute_median, impute_mode, impute_central,
    impute_with_model, multiple_impute, pool_imputations,
)


@pytest.fixture
def incomes():
    rng = np.random.default_rng(0)
    n = 60
    df = pd.DataFrame({
        'age': rng.integers(18, 80, n).astype(float),
        'trips_per_month': rng.poisson(3, n).astype(float),
        'region': rng.choice(['North', 'South'], n),
    })
    df['income'] = 20000 + 500 * df['age'] + rng.normal(0, 1000, n)
    df.loc[[3, 10, 25], 'income'] = np.nan
    return df


def test_median_fills_from_observed_rows():
    df = pd.DataFrame({'income': [10.0, np.nan, 30.0, 20.0]})
    out = impute_median(df, ['income'])
    assert out['income'].tolist() == [10.0, 20.0, 30.0, 20.0]
    assert df['income'].isna().sum() == 1


def test_median_is_idempotent():
    df = pd.DataFrame({'income': [10.0, np.nan, 30.0]})
    once = impute_median(df, ['income'])
    twice = impute_median(once, ['income'])
    pd.testing.assert_frame_equal(once, twice)


def test_median_rejects_text():
    df = pd.DataFrame({'region': ['a', None]})
    with pytest.raises(ImputationError):
        impute_median(df, ['region'])


def test_median_all_missing_raises():
    df = pd.DataFrame({'income': [np.nan, np.nan]})
    with pytest.raises(ImputationError):
        impute_median(df, ['income'])


def test_mode_ties_go_to_first_seen():
    assert column_mode(pd.Series(['b', 'a', 'a', 'b', None])) == 'b'


def test_mode_fill():
    df = pd.DataFrame({'region': ['North', None, 'South', 'South']})
    out = impute_mode(df, ['region'])
    assert out['region'].tolist() == ['North', 'South', 'South', 'South']


def test_mode_all_missing_raises():
    with pytest.raises(ImputationError):
        column_mode(pd.Series([None, None], name='region'))


def test_impute_central_unknown_strategy():
    with pytest.raises(ValueError, match='Unknown imputation strategies'):
        impute_central(pd.DataFrame({'x': [1.0]}), {'x': 'mean'})


def test_impute_central_mixed():
    df = pd.DataFrame({'income': [1.0, np.nan, 3.0], 'region': ['a', 'a', None]})
    out = impute_central(df, {'income': 'median', 'region': 'mode'})
    assert out.isna().sum().sum() == 0


def test_model_imputation_leaves_nothing_missing(incomes):
    out = impute_with_model(incomes, 'income', ['age', 'trips_per_month', 'region'], n_estimators=20)

    assert out['income'].isna().sum() == 0
    observed = incomes['income'].notna()
    pd.testing.assert_series_equal(out.loc[observed, 'income'], incomes.loc[observed, 'income'])
    assert incomes['income'].isna().sum() == 3


def test_model_imputation_is_reproducible(incomes):
    a = impute_with_model(incomes, 'income', ['age', 'region'], n_estimators=20, random_state=1)
    b = impute_with_model(incomes, 'income', ['age', 'region'], n_estimators=20, random_state=1)
    pd.testing.assert_frame_equal(a, b)


def test_missing_predictor_on_row_to_fill_raises(incomes):
    incomes.loc[3, 'age'] = np.nan
    with pytest.raises(ImputationError, match='missing predictors'):
        impute_with_model(incomes, 'income', ['age', 'region'])


def test_unknown_column_raises(incomes):
    with pytest.raises(ImputationError, match='not found'):
        impute_with_model(incomes, 'income', ['age', 'shoe_size'])


def test_target_as_predictor_raises(incomes):
    with pytest.raises(ImputationError):
        impute_with_model(incomes, 'income', ['income', 'age'])


def test_no_training_rows_raises():
    df = pd.DataFrame({'income': [np.nan, np.nan], 'age': [30.0, 40.0]})
    with pytest.raises(ImputationError, match='no complete rows'):
        impute_with_model(df, 'income', ['age'])


def test_categorical_target_uses_classifier(incomes):
    incomes['answer'] = np.where(incomes['age'] > 50, 'Yes', 'No')
    incomes.loc[[0, 1], 'answer'] = None
    out = impute_with_model(incomes, 'answer', ['age'], n_estimators=20)
    assert out['answer'].isna().sum() == 0
    assert set(out['answer']) <= {'Yes', 'No'}


def test_complete_target_is_returned_unchanged(incomes):
    complete = incomes.dropna()
    out = impute_with_model(complete, 'income', ['age'])
    pd.testing.assert_frame_equal(out, complete)


def test_multiple_imputation_and_pooling(incomes):
    draws = multiple_impute(incomes, 'income', ['age', 'region'], n_imputations=3, n_estimators=10)

    assert len(draws) == 3
    assert all(d['income'].isna().sum() == 0 for d in draws)

    pooled = pool_imputations(draws, 'income')
    assert pooled.isna().sum() == 0
    assert len(pooled) == len(incomes)


def test_multiple_imputation_needs_at_least_one():
    with pytest.raises(ValueError):
        multiple_impute(pd.DataFrame({'x': [1.0], 'y': [2.0]}), 'x', ['y'], n_imputations=0)


def test_pool_rejects_empty():
    with pytest.raises(ValueError):
        pool_imputations([], 'income')


def test_pipeline_one_hot_encodes_categorical_predictors(incomes):
    from sklearn.ensemble import RandomForestRegressor
    from data_engineering.impute import create_imputation_pipeline, get_feature_names

    complete = incomes.dropna()
    pipeline = create_imputation_pipeline(['age'], ['region'], RandomForestRegressor(n_estimators=5, random_state=0))
    pipeline.fit(complete[['age', 'region']], complete['income'])

    names = list(get_feature_names(pipeline))
    assert names[0] == 'age'
    assert set(names[1:]) == {'region_North', 'region_South'}


def test_central_substitution_shares_the_model_free_exception():
    from data_engineering.impute import central, errors, model_based

    assert errors.ImputationError.__module__ == 'data_engineering.impute.errors'
    assert central.ImputationError is errors.ImputationError
    assert model_based.ImputationError is errors.ImputationError
    assert not any(
        getattr(obj, '__module__', '').startswith('sklearn') for obj in vars(central).values()
    )
    assert issubclass(ImputationError, ValueError)

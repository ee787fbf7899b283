"""
Model-based imputation with random forests

A forest is fitted on rows where the target and every predictor are
observed, then used to fill the missing target values. Anything that
prevents a prediction (missing predictor, unknown column, nothing to train
on) raises ImputationError. There is no silent fallback to median/mode
substitution; callers choose that explicitly.

Usage:
    from data_engineering.impute import impute_with_model, multiple_impute

    filled = impute_with_model(df, 'income', ['age', 'trips_per_month', 'region'])
    completed = multiple_impute(df, 'income', ['age', 'region'], n_imputations=5)
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype, is_integer_dtype, is_numeric_dtype
from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from data_engineering.impute.errors import ImputationError
from data_engineering.impute.pipelines import create_imputation_pipeline


def split_predictors(df: pd.DataFrame, predictors: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split predictors into (numeric, categorical) by dtype"""
    numeric, categorical = [], []
    for col in predictors:
        if is_numeric_dtype(df[col]) and not is_bool_dtype(df[col]):
            numeric.append(col)
        else:
            categorical.append(col)
    return numeric, categorical


def _check_columns(df: pd.DataFrame, target: str, predictors: Sequence[str]):
    if not predictors:
        raise ImputationError(f'{target}: at least one predictor is required')
    if target in predictors:
        raise ImputationError(f'{target}: target cannot also be a predictor')
    unknown = [c for c in [target, *predictors] if c not in df.columns]
    if unknown:
        raise ImputationError(f'Columns not found in data: {unknown}')


def _default_model(df: pd.DataFrame, target: str, random_state: int, n_estimators: int):
    if is_numeric_dtype(df[target]) and not is_bool_dtype(df[target]):
        return RandomForestRegressor(n_estimators=n_estimators, random_state=random_state, n_jobs=-1)
    return RandomForestClassifier(n_estimators=n_estimators, random_state=random_state, n_jobs=-1)


def _fit_predict(train: pd.DataFrame, to_fill: pd.DataFrame, target: str,
                 predictors: Sequence[str], model) -> np.ndarray:
    numeric, categorical = split_predictors(train, predictors)
    pipeline = create_imputation_pipeline(numeric, categorical, model)
    try:
        pipeline.fit(train[list(predictors)], train[target])
        return pipeline.predict(to_fill[list(predictors)])
    except ValueError as e:
        raise ImputationError(f'{target}: model could not be fitted or could not predict: {e}') from e


def _prepare(df: pd.DataFrame, target: str, predictors: Sequence[str]):
    """Validate inputs; return (target-missing mask, complete training rows)"""
    _check_columns(df, target, predictors)

    target_missing = df[target].isna()
    blocked = df.loc[target_missing, list(predictors)].isna().any(axis=1)
    if blocked.any():
        cols = [c for c in predictors if df.loc[target_missing, c].isna().any()]
        raise ImputationError(
            f'{target}: {int(blocked.sum()):,} rows to impute have missing predictors {cols}. '
            f'Impute or drop those predictors first.'
        )

    train = df.loc[~target_missing].dropna(subset=list(predictors))
    if target_missing.any() and train.empty:
        raise ImputationError(f'{target}: no complete rows to fit the imputation model on')
    return target_missing, train


def _fill(df: pd.DataFrame, target: str, target_missing: pd.Series, predictions) -> pd.DataFrame:
    out = df.copy()
    if is_integer_dtype(out[target]):
        out[target] = out[target].astype(float)
    out.loc[target_missing, target] = predictions

    remaining = int(out[target].isna().sum())
    if remaining:
        raise ImputationError(f'{target}: {remaining:,} values still missing after imputation')
    return out


def impute_with_model(
    df: pd.DataFrame,
    target: str,
    predictors: Sequence[str],
    random_state: int = 42,
    n_estimators: int = 100,
    model=None
) -> pd.DataFrame:
    """
    Fill missing values in `target` from fully observed predictors

    Args:
        df: Input table
        target: Column to impute
        predictors: Columns used as model inputs
        random_state: Seed for the default forest
        n_estimators: Trees in the default forest
        model: Optional sklearn estimator replacing the default forest
            (regressor for numeric targets, classifier otherwise)

    Returns:
        Copy of df with zero missing values in `target`

    Raises:
        ImputationError: If any missing target value cannot be predicted
    """
    target_missing, train = _prepare(df, target, predictors)
    if not target_missing.any():
        return df.copy()

    if model is None:
        model = _default_model(df, target, random_state, n_estimators)

    predictions = _fit_predict(train, df.loc[target_missing], target, predictors, model)
    out = _fill(df, target, target_missing, predictions)
    print(f'  ✓ {target}: imputed {int(target_missing.sum()):,} values with '
          f'{type(model).__name__} on {len(train):,} complete rows')
    return out


def multiple_impute(
    df: pd.DataFrame,
    target: str,
    predictors: Sequence[str],
    n_imputations: int = 5,
    random_state: int = 42,
    n_estimators: int = 100
) -> List[pd.DataFrame]:
    """
    Draw several completed datasets for `target`

    Each draw fits a forest on a bootstrap sample of the complete rows with
    its own seed, so the spread across draws reflects imputation uncertainty.

    Returns:
        List of `n_imputations` completed copies of df
    """
    if n_imputations < 1:
        raise ValueError('n_imputations must be >= 1')

    target_missing, train = _prepare(df, target, predictors)
    if not target_missing.any():
        return [df.copy() for _ in range(n_imputations)]

    completed = []
    for i in range(n_imputations):
        seed = random_state + i
        sample = train.sample(n=len(train), replace=True, random_state=seed)
        model = _default_model(df, target, seed, n_estimators)
        predictions = _fit_predict(sample, df.loc[target_missing], target, predictors, model)
        completed.append(_fill(df, target, target_missing, predictions))

    print(f'  ✓ {target}: drew {n_imputations} imputations for {int(target_missing.sum()):,} missing values')
    return completed


def pool_imputations(frames: Sequence[pd.DataFrame], target: str) -> pd.Series:
    """Average a numeric target across completed datasets"""
    if not frames:
        raise ValueError('No imputed datasets to pool')
    if not is_numeric_dtype(frames[0][target]):
        raise ValueError(f'{target}: pooling by mean needs a numeric target')
    return pd.concat([f[target] for f in frames], axis=1).mean(axis=1).rename(target)

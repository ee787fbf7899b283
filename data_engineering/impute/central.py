"""
Central-tendency substitution

Missing values are replaced with the median (numeric fields) or the mode
(any field) computed over non-missing rows only. Both are idempotent: a
complete column is returned unchanged.
"""

from typing import Dict, Iterable

import pandas as pd
from pandas.api.types import is_integer_dtype, is_numeric_dtype

from data_engineering.impute.errors import ImputationError

STRATEGIES = ('median', 'mode')


def column_mode(series: pd.Series):
    """Most frequent non-missing value; ties go to the value seen first"""
    observed = series.dropna()
    if observed.empty:
        raise ImputationError(f'{series.name}: no observed values to take a mode from')

    first_seen = observed.drop_duplicates()
    counts = observed.value_counts()
    return counts.reindex(list(first_seen)).idxmax()


def impute_median(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Fill missing values in numeric columns with the column median

    Raises:
        ImputationError: If a column is non-numeric or has no observed values
    """
    out = df.copy()
    for col in columns:
        values = df[col]
        n_missing = int(values.isna().sum())
        if n_missing == 0:
            continue
        if not is_numeric_dtype(values):
            raise ImputationError(f'{col}: median substitution needs a numeric column (got {values.dtype})')

        median = values.median()
        if pd.isna(median):
            raise ImputationError(f'{col}: no observed values to take a median from')

        if is_integer_dtype(values) and float(median) != int(median):
            values = values.astype(float)
        out[col] = values.fillna(median)
        print(f'  ✓ {col}: filled {n_missing:,} missing with median {median:,.2f}')
    return out


def impute_mode(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """Fill missing values with the most frequent value (first seen on ties)"""
    out = df.copy()
    for col in columns:
        n_missing = int(df[col].isna().sum())
        if n_missing == 0:
            continue
        mode = column_mode(df[col])
        out[col] = df[col].fillna(mode)
        print(f'  ✓ {col}: filled {n_missing:,} missing with mode {mode!r}')
    return out


def impute_central(df: pd.DataFrame, strategy: Dict[str, str]) -> pd.DataFrame:
    """
    Apply median or mode substitution per column

    Args:
        df: Input table
        strategy: Column -> 'median' | 'mode'

    Returns:
        Copy with missing values filled in the listed columns
    """
    unknown = {c: s for c, s in strategy.items() if s not in STRATEGIES}
    if unknown:
        raise ValueError(f'Unknown imputation strategies: {unknown}. Expected one of: {STRATEGIES}')

    out = impute_median(df, [c for c, s in strategy.items() if s == 'median'])
    return impute_mode(out, [c for c, s in strategy.items() if s == 'mode'])

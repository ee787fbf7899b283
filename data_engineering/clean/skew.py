"""
Skew correction for non-negative count variables

Natural log when every value is strictly positive, square root as soon as a
zero is present (log is undefined at 0). The choice is a fixed rule, or an
explicit `method` from the caller; it is never tuned from the data's shape.
"""

from typing import Optional

import numpy as np
import pandas as pd

TRANSFORMS = ('log', 'sqrt')


def choose_skew_transform(series: pd.Series) -> str:
    """
    Pick the transform for a non-negative count variable

    Returns:
        'log' if the minimum observed value is > 0, otherwise 'sqrt'

    Raises:
        ValueError: If the variable has negative or no observed values
    """
    observed = series.dropna()
    if observed.empty:
        raise ValueError(f'{series.name}: no observed values to transform')

    minimum = observed.min()
    if minimum < 0:
        raise ValueError(f'{series.name}: negative values present (min={minimum}); expected a count variable')
    return 'log' if minimum > 0 else 'sqrt'


def log_transform(series: pd.Series) -> pd.Series:
    """Natural log. Rejected (ValueError) when any observed value is <= 0."""
    if (series.dropna() <= 0).any():
        raise ValueError(
            f'{series.name}: log transform is undefined for values <= 0; use sqrt_transform instead'
        )
    return np.log(series.astype(float))


def sqrt_transform(series: pd.Series) -> pd.Series:
    if (series.dropna() < 0).any():
        raise ValueError(f'{series.name}: sqrt transform is undefined for negative values')
    return np.sqrt(series.astype(float))


def correct_skew(
    df: pd.DataFrame,
    column: str,
    method: Optional[str] = None,
    suffix: Optional[str] = None
) -> pd.DataFrame:
    """
    Add a skew-corrected copy of `column`

    Args:
        df: Input table
        column: Non-negative count column
        method: 'log' or 'sqrt'; chosen by choose_skew_transform when None
        suffix: New column suffix (default: '_' + method)

    Returns:
        Copy with a `<column>_<method>` column added
    """
    if method is None:
        method = choose_skew_transform(df[column])
    elif method not in TRANSFORMS:
        raise ValueError(f'Unknown transform {method!r}. Expected one of: {TRANSFORMS}')

    transformed = log_transform(df[column]) if method == 'log' else sqrt_transform(df[column])
    new_col = f'{column}{suffix or "_" + method}'

    out = df.copy()
    out[new_col] = transformed

    print(f'  ✓ Skew correction on {column} ({method}): '
          f'skewness {df[column].skew():.2f} -> {transformed.skew():.2f}')
    return out

"""
IQR outlier detection

Detection only reports. Remediation (capping, deletion, masking for later
imputation) lives in separate functions that the caller has to invoke
explicitly; nothing in the pipeline applies them.
"""

from dataclasses import dataclass
from typing import Sequence

import pandas as pd


@dataclass(frozen=True)
class IQRBounds:
    q1: float
    q3: float
    iqr: float
    lower: float
    upper: float


def iqr_bounds(series: pd.Series, k: float = 1.5) -> IQRBounds:
    """
    Compute quartiles and outlier fences (linear quantile interpolation)

    Values below q1 - k*IQR or above q3 + k*IQR are outliers.
    """
    observed = series.dropna().astype(float)
    if observed.empty:
        raise ValueError(f'{series.name}: no observed values')

    q1 = observed.quantile(0.25)
    q3 = observed.quantile(0.75)
    iqr = q3 - q1
    return IQRBounds(q1=q1, q3=q3, iqr=iqr, lower=q1 - k * iqr, upper=q3 + k * iqr)


def flag_outliers_iqr(series: pd.Series, k: float = 1.5) -> pd.Series:
    """Boolean mask of values beyond the IQR fences. Missing values are never flagged."""
    bounds = iqr_bounds(series, k)
    return ((series < bounds.lower) | (series > bounds.upper)).fillna(False).astype(bool)


def outlier_report(df: pd.DataFrame, columns: Sequence[str], k: float = 1.5) -> pd.DataFrame:
    """
    Report IQR outliers per column without touching the data

    Returns:
        DataFrame with one row per column: quartiles, fences, count and values flagged
    """
    print(f'\n{"="*80}')
    print('OUTLIER REPORT (IQR rule, report only)')
    print(f'{"="*80}')

    rows = []
    for col in columns:
        bounds = iqr_bounds(df[col], k)
        mask = flag_outliers_iqr(df[col], k)
        flagged = df.loc[mask, col].tolist()
        rows.append({
            'column': col,
            'q1': bounds.q1,
            'q3': bounds.q3,
            'iqr': bounds.iqr,
            'lower': bounds.lower,
            'upper': bounds.upper,
            'n_outliers': len(flagged),
            'outlier_values': flagged,
        })
        marker = '⚠️ ' if flagged else '✓'
        print(f'  {marker} {col}: {len(flagged):,} outside [{bounds.lower:,.2f}, {bounds.upper:,.2f}]')

    return pd.DataFrame(rows, columns=[
        'column', 'q1', 'q3', 'iqr', 'lower', 'upper', 'n_outliers', 'outlier_values'
    ])


# ============================================================================
# MANUAL REMEDIATION
# ============================================================================

def cap_outliers(df: pd.DataFrame, column: str, k: float = 1.5) -> pd.DataFrame:
    """Clip `column` to its IQR fences (winsorize)"""
    bounds = iqr_bounds(df[column], k)
    out = df.copy()
    out[column] = df[column].clip(lower=bounds.lower, upper=bounds.upper)
    return out


def drop_outliers(df: pd.DataFrame, column: str, k: float = 1.5) -> pd.DataFrame:
    """Remove rows whose `column` value is an IQR outlier"""
    mask = flag_outliers_iqr(df[column], k)
    return df.loc[~mask].copy()


def mask_outliers(df: pd.DataFrame, column: str, k: float = 1.5) -> pd.DataFrame:
    """Set IQR outliers in `column` to missing so they can be imputed afterwards"""
    mask = flag_outliers_iqr(df[column], k)
    out = df.copy()
    out[column] = df[column].astype(float).mask(mask)
    return out

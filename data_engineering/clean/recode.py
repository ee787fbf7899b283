"""
Filter and recode stage

Drops respondents outside the survey's scope, removes sentinel codes from key
fields and turns coded integers into labelled categories. Each function
returns a new DataFrame; the input is never modified. An empty result is a
valid outcome, not an error.
"""

from typing import Dict, List, Optional, Sequence

import pandas as pd

from config.survey import (
    ELIGIBILITY_FLAGS,
    AGE_COL,
    AGE_SENTINELS,
    CLUSTER_ID_COL,
    CLUSTER_LABEL_COL,
    CLUSTER_LABELS,
    CLUSTER_ORDER,
)


def _report(step: str, before: int, after: int):
    removed = before - after
    print(f'  ✓ {step}: kept {after:,} / {before:,} rows ({removed:,} removed)')


def filter_eligible(df: pd.DataFrame, flags: Sequence[str] = ELIGIBILITY_FLAGS) -> pd.DataFrame:
    """
    Keep only rows where every eligibility flag equals 1

    Args:
        df: Respondent table
        flags: Flag columns that must all be 1

    Returns:
        Filtered copy
    """
    missing = [f for f in flags if f not in df.columns]
    if missing:
        raise ValueError(f'Eligibility flags not found in data: {missing}')

    mask = (df[list(flags)] == 1).all(axis=1)
    out = df.loc[mask].copy()
    _report('Eligibility filter', len(df), len(out))
    return out


def drop_sentinels(df: pd.DataFrame, column: str, sentinels: Sequence = AGE_SENTINELS) -> pd.DataFrame:
    """Drop rows whose value in `column` is a sentinel code or missing"""
    values = df[column]
    mask = values.notna() & ~values.isin(list(sentinels))
    out = df.loc[mask].copy()
    _report(f'Sentinel filter on {column}', len(df), len(out))
    return out


def recode_clusters(
    df: pd.DataFrame,
    id_col: str = CLUSTER_ID_COL,
    mapping: Optional[Dict[int, str]] = None,
    label_col: str = CLUSTER_LABEL_COL,
    order: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Replace a numeric cluster id with its fixed, ordered label

    Rows whose id has no entry in the mapping are dropped, never defaulted.

    Args:
        df: Respondent table
        id_col: Column holding the numeric cluster id
        mapping: Cluster id -> label (default: config.survey.CLUSTER_LABELS)
        label_col: Name of the new label column
        order: Label order used for every chart axis (default: CLUSTER_ORDER)

    Returns:
        Copy with `label_col` as an ordered categorical
    """
    mapping = CLUSTER_LABELS if mapping is None else mapping
    order = CLUSTER_ORDER if order is None else order

    unknown = set(mapping.values()) - set(order)
    if unknown:
        raise ValueError(f'Cluster labels missing from the fixed order: {sorted(unknown)}')

    labels = df[id_col].map(mapping)
    keep = labels.notna()

    out = df.loc[keep].copy()
    out[label_col] = pd.Categorical(labels[keep], categories=order, ordered=True)
    _report(f'Cluster recode ({id_col} -> {label_col})', len(df), len(out))
    return out


def recode_codes(
    df: pd.DataFrame,
    column: str,
    mapping: Dict,
    ordered: bool = False,
    order: Optional[List[str]] = None,
    label_col: Optional[str] = None
) -> pd.DataFrame:
    """
    Recode integer codes into labelled categories

    Unlike recode_clusters, rows are kept: codes without a label become missing.
    """
    label_col = label_col or column
    categories = order if order is not None else list(dict.fromkeys(mapping.values()))

    out = df.copy()
    out[label_col] = pd.Categorical(
        df[column].map(mapping),
        categories=categories,
        ordered=ordered
    )
    unmapped = int((out[label_col].isna() & df[column].notna()).sum())
    if unmapped:
        print(f'  ⚠️  {unmapped:,} values in {column} had no label and were set to missing')
    return out


def clean_survey(
    df: pd.DataFrame,
    flags: Sequence[str] = ELIGIBILITY_FLAGS,
    sentinel_col: str = AGE_COL,
    sentinels: Sequence = AGE_SENTINELS,
    id_col: str = CLUSTER_ID_COL,
    mapping: Optional[Dict[int, str]] = None,
    label_col: str = CLUSTER_LABEL_COL,
    order: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Run the filter/recode steps in sequence

    eligibility filter -> sentinel filter -> cluster recode
    """
    print(f'\n{"="*80}')
    print('FILTER / RECODE')
    print(f'{"="*80}')

    out = filter_eligible(df, flags)
    out = drop_sentinels(out, sentinel_col, sentinels)
    out = recode_clusters(out, id_col, mapping, label_col, order)

    if len(out) == 0:
        print('  ⚠️  No respondents left after filtering')
    return out

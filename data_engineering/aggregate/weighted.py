#!/usr/bin/env python3
"""
Weighted Aggregation

Turns respondent rows carrying a survey weight into per-group weighted sums,
weighted means and integer percentage shares, plus the wide -> long reshape
the renderers expect.

Share rules:
- share = 100 * weighted_sum / group_total as an integer, allocated by largest
  remainder so each defined group sums to exactly 100
- rows with a missing category are excluded before totals are taken
- a group whose total is 0 gets share <NA> and share_status 'undefined'

Usage:
    from data_engineering.aggregate import weighted_shares

    shares = weighted_shares(df, group='region', category='trust_answer')
"""

from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from config.survey import WEIGHT_COL

GroupKey = Union[str, Sequence[str]]


def _keys(group: GroupKey) -> List[str]:
    return [group] if isinstance(group, str) else list(group)


def _usable_rows(df: pd.DataFrame, category: Optional[str], value: Optional[str], weight: str) -> pd.DataFrame:
    subset = [c for c in (category, value, weight) if c is not None]
    usable = df.dropna(subset=subset)
    dropped = len(df) - len(usable)
    if dropped:
        print(f'  ⚠️  Excluded {dropped:,} rows with missing {", ".join(subset)}')
    return usable


def _snap(values: pd.Series) -> pd.Series:
    # 28.5 computed as 28.499999999999996 must still count as an exact half
    return values.astype(float).round(9)


def round_half_up(values: pd.Series) -> pd.Series:
    """Round to the nearest integer, .5 away from zero; missing stays missing"""
    snapped = _snap(values)
    return (np.sign(snapped) * np.floor(snapped.abs() + 0.5)).astype('Int64')


def _category_rank(df: pd.DataFrame, category: str, values: pd.Series) -> pd.Series:
    """Position of each category: categorical order, else first appearance in df"""
    if isinstance(values.dtype, pd.CategoricalDtype):
        return pd.Series(values.cat.codes, index=values.index)
    first_seen = {v: i for i, v in enumerate(dict.fromkeys(df[category].dropna()))}
    return values.map(first_seen)


def largest_remainder_shares(
    exact: pd.Series,
    keys: pd.DataFrame,
    tie_rank: pd.Series
) -> pd.Series:
    """
    Integer percentages that sum to exactly 100 within each group

    Each exact share is floored, then the points still missing from 100 go
    to the largest fractional parts (ties: lower `tie_rank` first). Every
    share stays within 1 of its exact value. Missing exact shares stay <NA>.

    Args:
        exact: Exact percentages (0-100), NaN where undefined
        keys: Group key columns, aligned with `exact`
        tie_rank: Category position used to break equal remainders

    Returns:
        Int64 Series aligned with `exact`
    """
    snapped = _snap(exact)
    floors = np.floor(snapped)
    key_cols = list(keys.columns)

    work = keys.copy()
    work['_remainder'] = snapped - floors
    work['_tie'] = tie_rank.values
    work['_floor'] = floors
    leftover = 100 - work.groupby(key_cols, observed=True, sort=False)['_floor'].transform('sum')

    ordered = work.sort_values(
        key_cols + ['_remainder', '_tie'],
        ascending=[True] * len(key_cols) + [False, True],
        kind='mergesort'
    )
    position = ordered.groupby(key_cols, observed=True, sort=False).cumcount().reindex(work.index)

    shares = floors + (position < leftover).astype(float)
    return shares.where(snapped.notna()).astype('Int64')


def weighted_sums(
    df: pd.DataFrame,
    group: GroupKey,
    category: str,
    value: Optional[str] = None,
    weight: str = WEIGHT_COL
) -> pd.DataFrame:
    """
    Sum value * weight for each (group, category)

    Args:
        df: Respondent table
        group: Grouping key column (or list of columns)
        category: Category column
        value: Value column; None sums the weights alone
        weight: Survey weight column

    Returns:
        DataFrame with columns [group, category, 'weighted_sum']; categorical
        dtypes (and their order) are preserved
    """
    usable = _usable_rows(df, category, value, weight)
    contribution = usable[weight] * (usable[value] if value is not None else 1.0)

    return (
        usable.assign(_weighted=contribution.astype(float))
        .groupby([*_keys(group), category], observed=True, sort=True)['_weighted']
        .sum()
        .reset_index(name='weighted_sum')
    )


def weighted_shares(
    df: pd.DataFrame,
    group: GroupKey,
    category: str,
    value: Optional[str] = None,
    weight: str = WEIGHT_COL
) -> pd.DataFrame:
    """
    Weighted percentage share of each category within its group

    Shares are allocated by largest remainder, so every 'ok' group sums to
    exactly 100 and each share is within 1 of 100 * weighted_sum / group_total.

    Returns:
        DataFrame with [group, category, 'weighted_sum', 'group_total',
        'share' (Int64), 'share_status' ('ok' | 'undefined')]
    """
    keys = _keys(group)
    sums = weighted_sums(df, group, category, value, weight)
    totals = sums.groupby(keys, observed=True)['weighted_sum'].transform('sum')
    undefined = totals == 0

    shares = sums.copy()
    shares['group_total'] = totals
    shares['share'] = largest_remainder_shares(
        100 * shares['weighted_sum'] / totals.where(~undefined),
        shares[keys],
        _category_rank(df, category, shares[category])
    )
    shares['share_status'] = np.where(undefined, 'undefined', 'ok')

    if undefined.any():
        bad_groups = shares.loc[undefined, keys].drop_duplicates().values.tolist()
        print(f'  ⚠️  Share undefined (zero total weight) for {group}: {bad_groups}')

    return shares


def weighted_mean(
    df: pd.DataFrame,
    group: str,
    value: str,
    weight: str = WEIGHT_COL
) -> pd.DataFrame:
    """
    Weighted mean of `value` per group

    Groups with zero total weight get NaN and are reported.
    """
    usable = _usable_rows(df, None, value, weight)
    grouped = (
        usable.assign(_weighted=usable[value] * usable[weight])
        .groupby(group, observed=True, sort=True)
        .agg(weighted_total=('_weighted', 'sum'), weight_total=(weight, 'sum'))
    )
    zero = grouped['weight_total'] == 0
    if zero.any():
        print(f'  ⚠️  Weighted mean undefined (zero total weight) for {group}: {grouped.index[zero].tolist()}')

    grouped['weighted_mean'] = grouped['weighted_total'] / grouped['weight_total'].where(~zero)
    return grouped.reset_index()[[group, 'weighted_mean', 'weight_total']]


def to_long(
    df: pd.DataFrame,
    id_vars: Sequence[str],
    value_vars: Optional[Sequence[str]] = None,
    var_name: str = 'variable',
    value_name: str = 'value'
) -> pd.DataFrame:
    """Reshape from wide to long form"""
    return pd.melt(
        df,
        id_vars=list(id_vars),
        value_vars=list(value_vars) if value_vars is not None else None,
        var_name=var_name,
        value_name=value_name
    )

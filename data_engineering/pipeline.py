#!/usr/bin/env python3
"""
Survey Cleaning Pipeline

Runs the cleaning and aggregation stages in order, passing an explicit table
from one named stage to the next. No stage mutates its input; every
intermediate table is kept on the returned PipelineResult.

Stages:
1. Eligibility filter
2. Sentinel filter + cluster/answer recode
3. Skew correction of the count variable
4. Outlier report (IQR rule, report only)
5. Imputation (model-based or central-tendency, caller's choice)
6. Weighted shares and weighted means (wide and long)

Usage:
    from data_engineering.pipeline import PipelineConfig, run_survey_pipeline

    result = run_survey_pipeline(raw_df, PipelineConfig(imputation='central'))
    result.shares
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from config.survey import (
    ELIGIBILITY_FLAGS, AGE_COL, AGE_SENTINELS,
    CLUSTER_ID_COL, CLUSTER_LABEL_COL, CLUSTER_LABELS, CLUSTER_ORDER,
    ANSWER_COL, ANSWER_LABELS, COUNT_COL, INCOME_COL, GROUP_COL, WEIGHT_COL,
)
from data_engineering.clean import (
    filter_eligible, drop_sentinels, recode_clusters, recode_codes,
    correct_skew, outlier_report,
)
from data_engineering.impute import impute_with_model, impute_central
from data_engineering.aggregate import weighted_shares, weighted_mean, to_long

IMPUTATION_METHODS = ('model', 'central')


@dataclass
class PipelineConfig:
    """Column names and policies for one pipeline run"""
    flags: List[str] = field(default_factory=lambda: list(ELIGIBILITY_FLAGS))
    sentinel_col: str = AGE_COL
    sentinels: List = field(default_factory=lambda: list(AGE_SENTINELS))

    cluster_id_col: str = CLUSTER_ID_COL
    cluster_label_col: str = CLUSTER_LABEL_COL
    cluster_labels: Dict[int, str] = field(default_factory=lambda: dict(CLUSTER_LABELS))
    cluster_order: List[str] = field(default_factory=lambda: list(CLUSTER_ORDER))

    # None when the answer column already holds labels
    answer_col: str = ANSWER_COL
    answer_labels: Optional[Dict[int, str]] = field(default_factory=lambda: dict(ANSWER_LABELS))

    count_col: str = COUNT_COL
    skew_method: Optional[str] = None
    outlier_cols: List[str] = field(default_factory=lambda: [COUNT_COL, INCOME_COL])

    imputation: str = 'model'
    impute_target: str = INCOME_COL
    impute_predictors: List[str] = field(default_factory=lambda: [AGE_COL, COUNT_COL, GROUP_COL])
    central_strategy: Dict[str, str] = field(default_factory=lambda: {INCOME_COL: 'median'})
    random_state: int = 42

    group_col: str = GROUP_COL
    weight_col: str = WEIGHT_COL
    mean_cols: List[str] = field(default_factory=lambda: [INCOME_COL, COUNT_COL])

    def __post_init__(self):
        if self.imputation not in IMPUTATION_METHODS:
            raise ValueError(f'imputation must be one of {IMPUTATION_METHODS}, got {self.imputation!r}')


@dataclass
class PipelineResult:
    """Every stage's output table"""
    raw: pd.DataFrame
    eligible: pd.DataFrame
    recoded: pd.DataFrame
    transformed: Optional[pd.DataFrame] = None
    outliers: Optional[pd.DataFrame] = None
    imputed: Optional[pd.DataFrame] = None
    shares: Optional[pd.DataFrame] = None
    region_shares: Optional[pd.DataFrame] = None
    means: Optional[pd.DataFrame] = None
    long: Optional[pd.DataFrame] = None

    @property
    def is_empty(self) -> bool:
        return len(self.recoded) == 0


def print_header(text):
    """Print a formatted header"""
    print('\n' + '=' * 80)
    print(text.center(80))
    print('=' * 80)


def impute_stage(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    """Run the imputation method selected in the config"""
    if config.imputation == 'model':
        return impute_with_model(
            df,
            config.impute_target,
            config.impute_predictors,
            random_state=config.random_state
        )
    return impute_central(df, config.central_strategy)


def aggregate_stage(df: pd.DataFrame, config: PipelineConfig):
    """Return (cluster shares, region x cluster shares, wide means, long means)"""
    shares = weighted_shares(df, config.cluster_label_col, config.answer_col, weight=config.weight_col)
    region_shares = weighted_shares(
        df, [config.group_col, config.cluster_label_col], config.answer_col, weight=config.weight_col
    )

    means = None
    for col in config.mean_cols:
        col_mean = weighted_mean(df, config.cluster_label_col, col, config.weight_col)
        col_mean = col_mean[[config.cluster_label_col, 'weighted_mean']].rename(columns={'weighted_mean': col})
        means = col_mean if means is None else means.merge(col_mean, on=config.cluster_label_col, how='outer')

    long = to_long(means, [config.cluster_label_col], config.mean_cols, 'measure', 'weighted_mean')
    return shares, region_shares, means, long


def run_survey_pipeline(raw: pd.DataFrame, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """
    Run every stage on a validated respondent table

    An empty table after filtering ends the run early; later stages are left
    as None on the result.
    """
    config = config or PipelineConfig()

    print_header('STAGE 1: ELIGIBILITY')
    eligible = filter_eligible(raw, config.flags)

    print_header('STAGE 2: SENTINELS AND RECODES')
    recoded = drop_sentinels(eligible, config.sentinel_col, config.sentinels)
    recoded = recode_clusters(
        recoded, config.cluster_id_col, config.cluster_labels,
        config.cluster_label_col, config.cluster_order
    )
    if config.answer_labels is not None:
        recoded = recode_codes(recoded, config.answer_col, config.answer_labels)

    result = PipelineResult(raw=raw, eligible=eligible, recoded=recoded)
    if result.is_empty:
        print('\n⚠️  No respondents left after filtering - stopping before transforms')
        return result

    print_header('STAGE 3: SKEW CORRECTION')
    result.transformed = correct_skew(recoded, config.count_col, config.skew_method)

    result.outliers = outlier_report(result.transformed, config.outlier_cols)

    print_header(f'STAGE 4: IMPUTATION ({config.imputation})')
    result.imputed = impute_stage(result.transformed, config)

    print_header('STAGE 5: WEIGHTED AGGREGATION')
    result.shares, result.region_shares, result.means, result.long = aggregate_stage(result.imputed, config)
    print(f'  ✓ {len(result.shares):,} cluster share rows, {len(result.region_shares):,} region share rows')

    return result

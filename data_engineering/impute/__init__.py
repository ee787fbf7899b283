"""
Imputation stage: central-tendency substitution and model-based imputation.
"""

from .errors import ImputationError

from .model_based import (
    impute_with_model,
    multiple_impute,
    pool_imputations,
    split_predictors,
)

from .central import (
    column_mode,
    impute_median,
    impute_mode,
    impute_central,
)

from .pipelines import create_imputation_pipeline, get_feature_names

__all__ = [
    'ImputationError',
    'impute_with_model',
    'multiple_impute',
    'pool_imputations',
    'split_predictors',
    'column_mode',
    'impute_median',
    'impute_mode',
    'impute_central',
    'create_imputation_pipeline',
    'get_feature_names',
]

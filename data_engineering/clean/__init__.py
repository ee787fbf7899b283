"""
Cleaning stage: filter/recode, skew correction and outlier detection.
"""

from .recode import (
    filter_eligible,
    drop_sentinels,
    recode_clusters,
    recode_codes,
    clean_survey,
)

from .skew import (
    choose_skew_transform,
    log_transform,
    sqrt_transform,
    correct_skew,
)

from .outliers import (
    IQRBounds,
    iqr_bounds,
    flag_outliers_iqr,
    outlier_report,
    cap_outliers,
    drop_outliers,
    mask_outliers,
)

__all__ = [
    'filter_eligible',
    'drop_sentinels',
    'recode_clusters',
    'recode_codes',
    'clean_survey',
    'choose_skew_transform',
    'log_transform',
    'sqrt_transform',
    'correct_skew',
    'IQRBounds',
    'iqr_bounds',
    'flag_outliers_iqr',
    'outlier_report',
    'cap_outliers',
    'drop_outliers',
    'mask_outliers',
]

"""
Shared utilities: schema validation and data quality checks.
"""

from .validation import (
    build_schema,
    validate_survey_dataset,
    check_data_quality,
    survey_schema,
)

__all__ = [
    'build_schema',
    'validate_survey_dataset',
    'check_data_quality',
    'survey_schema',
]

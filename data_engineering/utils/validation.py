#!/usr/bin/env python3
"""
Data Quality and Schema Validation

Uses pandera to validate survey tables once, at load time:
- Schema compliance (declared fields present, types coerced, ranges checked)
- Data quality checks (missing values, duplicate respondent ids)

The schema is declared as a plain mapping of field name -> semantic type
(see config.survey.SURVEY_FIELDS) and turned into a pandera DataFrameSchema.

Usage:
    from data_engineering.utils.validation import validate_survey_dataset

    df = validate_survey_dataset(raw_df, 'wave_1')
"""

import pandera as pa
from pandera import Column, Check
import pandas as pd
from typing import Dict, Optional

from config.survey import SURVEY_FIELDS, ID_COL


# ============================================================================
# SEMANTIC TYPES
# ============================================================================

SEMANTIC_TYPES = (
    'identifier',
    'group',
    'flag',
    'code',
    'continuous',
    'count',
    'categorical',
    'weight',
    'coordinate',
)


def _column_for(semantic_type: str, name: str) -> Column:
    """Map one semantic type onto a pandera Column"""
    if semantic_type == 'identifier':
        return Column(nullable=False, description=f'{name}: respondent id')
    if semantic_type == 'group':
        return Column(nullable=False, description=f'{name}: grouping key')
    if semantic_type == 'flag':
        return Column(int, Check.isin([0, 1]), nullable=False, coerce=True)
    if semantic_type == 'code':
        # Coded integers; unmapped or missing codes are dropped by the recode stage
        return Column('Int64', nullable=True, coerce=True)
    if semantic_type == 'continuous':
        return Column(float, nullable=True, coerce=True)
    if semantic_type == 'count':
        return Column(float, Check.greater_than_or_equal_to(0), nullable=True, coerce=True)
    if semantic_type == 'categorical':
        return Column(nullable=True)
    if semantic_type == 'weight':
        return Column(float, Check.greater_than_or_equal_to(0), nullable=False, coerce=True)
    if semantic_type == 'coordinate':
        return Column(float, nullable=True, coerce=True)
    raise ValueError(
        f'Unknown semantic type {semantic_type!r} for field {name!r}. '
        f'Expected one of: {", ".join(SEMANTIC_TYPES)}'
    )


def build_schema(fields: Dict[str, str], description: str = 'Survey schema') -> pa.DataFrameSchema:
    """
    Build a pandera schema from a field -> semantic type mapping

    Args:
        fields: Mapping of column name to semantic type
        description: Schema description

    Returns:
        DataFrameSchema requiring every declared column (extra columns allowed)

    Raises:
        ValueError: If a semantic type is not recognised
    """
    columns = {name: _column_for(sem_type, name) for name, sem_type in fields.items()}
    return pa.DataFrameSchema(
        columns,
        strict=False,  # Allow extra columns not declared here
        description=description
    )


survey_schema = build_schema(SURVEY_FIELDS, 'Respondent-level survey schema')


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_survey_dataset(
    df: pd.DataFrame,
    name: str = 'dataset',
    fields: Optional[Dict[str, str]] = None
) -> pd.DataFrame:
    """
    Validate a survey table against its declared schema

    Args:
        df: DataFrame to validate
        name: Dataset name for progress reporting
        fields: Field -> semantic type map (default: config.survey.SURVEY_FIELDS)

    Returns:
        New DataFrame with declared columns coerced to their types

    Raises:
        pandera.errors.SchemaErrors: If the table does not match the schema
    """
    schema = survey_schema if fields is None else build_schema(fields)

    print(f'\n{"="*70}')
    print(f'Validating {name} dataset')
    print(f'{"="*70}')

    try:
        validated = schema.validate(df.copy(), lazy=True)
        print(f'  ✓ Schema validation passed ({len(schema.columns)} declared fields)')
    except pa.errors.SchemaErrors as err:
        print(f'  ❌ Schema validation failed for {name}:')
        print(err.failure_cases)
        raise

    check_data_quality(validated, name)

    return validated


def check_data_quality(df: pd.DataFrame, name: str) -> dict:
    """
    Perform data quality checks beyond schema validation

    Checks:
    - Missing value percentages
    - Duplicate respondent ids
    """
    summary = {'rows': len(df), 'high_missing': {}, 'duplicate_ids': 0}

    if len(df) == 0:
        print(f'  ⚠️  {name} is empty')
        return summary

    missing_pct = (df.isnull().sum() / len(df) * 100).sort_values(ascending=False)
    high_missing = missing_pct[missing_pct > 50]
    if len(high_missing) > 0:
        print(f'  ⚠️  High missing values (>50%):')
        for col, pct in high_missing.items():
            print(f'     - {col}: {pct:.1f}%')
    summary['high_missing'] = high_missing.to_dict()

    if ID_COL in df.columns:
        dup_count = int(df[ID_COL].duplicated().sum())
        if dup_count > 0:
            print(f'  ⚠️  WARNING: {dup_count} duplicate IDs found')
        summary['duplicate_ids'] = dup_count

    return summary

"""
Data Engineering Module for the survey cleaning pipeline

This module contains the data code organized by pipeline stage:
1. load/ - Survey tables and spatial files
2. clean/ - Filter/recode, skew correction, outlier detection
3. impute/ - Median/mode substitution and random-forest imputation
4. aggregate/ - Weighted sums, means and percentage shares
5. spatial/ - CRS-checked spatial joins
6. pipeline.py - Stage orchestration

Usage:
    from data_engineering.load import load_survey_csv
    from data_engineering.pipeline import run_survey_pipeline
"""

__version__ = "1.0.0"

#!/usr/bin/env python3
"""
sklearn Pipelines for model-based imputation

Combines predictor encoding and a random-forest model so the rows used for
fitting and the rows being filled go through identical transformations.

Usage:
    from data_engineering.impute.pipelines import create_imputation_pipeline

    pipeline = create_imputation_pipeline(
        numeric_features=['age', 'trips_per_month'],
        categorical_features=['region'],
        model=RandomForestRegressor(random_state=42)
    )
    pipeline.fit(X_complete, y_complete)
"""

from sklearn.pipeline import Pipeline
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import OneHotEncoder


def create_imputation_pipeline(numeric_features, categorical_features, model=None):
    """
    Create predictor encoding + model pipeline

    Predictors must be fully observed, so there is no imputer step here:
    numeric columns pass through, categorical columns are one-hot encoded.

    Args:
        numeric_features: List of numeric predictor names
        categorical_features: List of categorical predictor names
        model: sklearn estimator (default: None, must be set later with set_params)

    Returns:
        sklearn Pipeline with 'preprocessor' and 'model' steps
    """
    transformers = []
    if numeric_features:
        transformers.append(('num', 'passthrough', list(numeric_features)))
    if categorical_features:
        transformers.append((
            'cat',
            OneHotEncoder(handle_unknown='ignore', sparse_output=False),
            list(categorical_features)
        ))

    preprocessor = ColumnTransformer(
        transformers=transformers,
        remainder='drop'  # Drop any columns not specified
    )

    return Pipeline([
        ('preprocessor', preprocessor),
        ('model', model)
    ])


def get_feature_names(pipeline):
    """
    Extract encoded predictor names from a fitted pipeline

    Args:
        pipeline: Fitted Pipeline from create_imputation_pipeline

    Returns:
        List of feature names after transformation
    """
    preprocessor = pipeline.named_steps['preprocessor']

    feature_names = []
    for name, transformer, columns in preprocessor.transformers_:
        if name == 'num':
            feature_names.extend(columns)
        elif name == 'cat':
            feature_names.extend(transformer.get_feature_names_out(columns))

    return feature_names

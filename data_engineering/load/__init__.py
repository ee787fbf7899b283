"""
Loader stage: survey tables and spatial files.
"""

from .loaders import (
    load_survey_csv,
    load_survey_stata,
    load_vector,
    load_raster,
)

__all__ = [
    'load_survey_csv',
    'load_survey_stata',
    'load_vector',
    'load_raster',
]

"""
Spatial helpers: point construction, CRS checks and joins.
"""

from .joins import (
    CRSMismatchError,
    points_from_frame,
    ensure_same_crs,
    reproject,
    spatial_join,
    nearest_join,
    sample_raster,
)

__all__ = [
    'CRSMismatchError',
    'points_from_frame',
    'ensure_same_crs',
    'reproject',
    'spatial_join',
    'nearest_join',
    'sample_raster',
]

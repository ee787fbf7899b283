"""
Spatial joins between respondents and spatial features

Every join checks that both sides carry the same coordinate reference
system first; a mismatch is an error, never a silent reprojection. Joins go
through geopandas so that geometry and attributes always travel together.

Usage:
    from data_engineering.spatial import points_from_frame, spatial_join

    respondents = points_from_frame(survey_df, 'lon', 'lat')
    with_region = spatial_join(respondents, regions, predicate='within')
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd
import geopandas as gpd
import rasterio
from pyproj import CRS

from config.survey import DEFAULT_CRS, METRIC_CRS, LON_COL, LAT_COL


class CRSMismatchError(ValueError):
    """Raised when two spatial layers do not share a coordinate reference system."""


def points_from_frame(
    df: pd.DataFrame,
    lon_col: str = LON_COL,
    lat_col: str = LAT_COL,
    crs: str = DEFAULT_CRS
) -> gpd.GeoDataFrame:
    """
    Build a point GeoDataFrame from coordinate columns

    Rows without coordinates are dropped (and reported).
    """
    with_coords = df[df[lon_col].notna() & df[lat_col].notna()].copy()
    dropped = len(df) - len(with_coords)
    if dropped:
        print(f'  ⚠️  Dropped {dropped:,} rows without coordinates')

    return gpd.GeoDataFrame(
        with_coords,
        geometry=gpd.points_from_xy(with_coords[lon_col], with_coords[lat_col]),
        crs=crs
    )


def ensure_same_crs(left: gpd.GeoDataFrame, right: gpd.GeoDataFrame):
    """
    Raise CRSMismatchError unless both layers declare the same CRS
    """
    if left.crs is None or right.crs is None:
        raise CRSMismatchError(
            f'Both layers need an explicit CRS (left: {left.crs}, right: {right.crs})'
        )
    if CRS.from_user_input(left.crs) != CRS.from_user_input(right.crs):
        raise CRSMismatchError(
            f'CRS mismatch: left is {left.crs.to_string()}, right is {right.crs.to_string()}. '
            f'Reproject one side explicitly with reproject() first.'
        )


def reproject(gdf: gpd.GeoDataFrame, crs: str) -> gpd.GeoDataFrame:
    if gdf.crs is None:
        raise CRSMismatchError('Cannot reproject a layer without a CRS; set one first')
    return gdf.to_crs(crs)


def spatial_join(
    left: gpd.GeoDataFrame,
    right: gpd.GeoDataFrame,
    how: str = 'left',
    predicate: str = 'within'
) -> gpd.GeoDataFrame:
    """
    Attach attributes of `right` to `left` by spatial predicate

    Args:
        left: Layer whose geometry is kept (e.g. respondent points)
        right: Layer providing attributes (e.g. region polygons)
        how: 'left', 'inner' or 'right'
        predicate: Spatial predicate ('within', 'intersects', ...)

    Returns:
        GeoDataFrame with the joined attributes

    Raises:
        CRSMismatchError: If the layers' CRS differ
    """
    ensure_same_crs(left, right)
    joined = gpd.sjoin(left, right, how=how, predicate=predicate)

    matched = joined['index_right'].notna().sum() if 'index_right' in joined.columns else len(joined)
    print(f'  ✓ Spatial join ({predicate}): matched {matched:,} / {len(joined):,} features')
    return joined


def nearest_join(
    left: gpd.GeoDataFrame,
    right: gpd.GeoDataFrame,
    max_distance: Optional[float] = None,
    distance_col: str = 'distance_m',
    metric_crs: str = METRIC_CRS
) -> gpd.GeoDataFrame:
    """
    Match each feature of `left` with its nearest feature of `right`

    Distances are computed in `metric_crs` (meters); the result is returned
    in the original CRS of `left`.
    """
    ensure_same_crs(left, right)
    original_crs = left.crs

    joined = gpd.sjoin_nearest(
        left.to_crs(metric_crs),
        right.to_crs(metric_crs),
        how='left',
        max_distance=max_distance,
        distance_col=distance_col
    )
    joined = joined.to_crs(original_crs)

    matched = joined[distance_col].notna().sum()
    print(f'  ✓ Nearest join: matched {matched:,} / {len(joined):,} features')
    if matched > 0:
        print(f'    Mean distance: {joined[distance_col].mean():,.0f}m')
    return joined


def sample_raster(
    path: Union[str, Path],
    points: gpd.GeoDataFrame,
    value_col: str = 'raster_value'
) -> gpd.GeoDataFrame:
    """
    Read raster band 1 at each point location

    Nodata cells become NaN.

    Raises:
        FileNotFoundError: If the raster doesn't exist
        CRSMismatchError: If the raster and points use different CRS
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'Raster not found: {path}')

    with rasterio.open(path) as src:
        if points.crs is None or src.crs is None or CRS.from_user_input(points.crs) != CRS.from_user_input(src.crs):
            raise CRSMismatchError(f'CRS mismatch: points are {points.crs}, raster is {src.crs}')

        coords = [(geom.x, geom.y) for geom in points.geometry]
        values = np.array([v[0] for v in src.sample(coords, indexes=1)], dtype=float)
        if src.nodata is not None:
            values[values == src.nodata] = np.nan

    out = points.copy()
    out[value_col] = values
    return out

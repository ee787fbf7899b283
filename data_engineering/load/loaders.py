"""
Loaders for survey tables and spatial files

Every loader fails fast: a missing file raises FileNotFoundError and a
table that does not match its declared schema raises pandera's SchemaErrors.
Nothing is retried.

Usage:
    from data_engineering.load import load_survey_csv, load_vector

    survey = load_survey_csv('data/bronze/survey/survey_responses.csv')
    regions = load_vector('data/bronze/spatial/regions.shp')
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd
import geopandas as gpd
import rasterio

from data_engineering.utils.validation import validate_survey_dataset

PathLike = Union[str, Path]

# Companion files a shapefile cannot be read without
SHAPEFILE_COMPANIONS = ('.shx', '.dbf')


def _require_file(path: PathLike) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'File not found: {path}')
    return path


def load_survey_csv(path: PathLike, fields: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """
    Load a comma-separated survey export (header row required) and validate it

    Args:
        path: CSV file path
        fields: Field -> semantic type map (default: config.survey.SURVEY_FIELDS)

    Returns:
        Validated DataFrame

    Raises:
        FileNotFoundError: If the file doesn't exist
        pandera.errors.SchemaErrors: If the table doesn't match the schema
    """
    path = _require_file(path)
    print(f'\nReading {path}...')
    df = pd.read_csv(path)
    print(f'  ✓ Loaded {len(df):,} rows, {len(df.columns)} columns')
    return validate_survey_dataset(df, path.stem, fields)


def load_survey_stata(path: PathLike, fields: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """
    Load a Stata .dta survey table and validate it

    Value labels are not applied: coded integers stay integers so that the
    recode stage owns the code -> label mapping.
    """
    path = _require_file(path)
    print(f'\nReading {path}...')
    df = pd.read_stata(path, convert_categoricals=False)
    print(f'  ✓ Loaded {len(df):,} rows, {len(df.columns)} columns')
    return validate_survey_dataset(df, path.stem, fields)


def load_vector(path: PathLike, crs_required: bool = True) -> gpd.GeoDataFrame:
    """
    Load a vector file set (shapefile, GeoPackage, GeoJSON)

    Args:
        path: Path to the main file (.shp for shapefiles)
        crs_required: Raise if the file carries no coordinate reference system

    Returns:
        GeoDataFrame

    Raises:
        FileNotFoundError: If the file or a required shapefile companion is missing
        ValueError: If crs_required and the layer has no CRS
    """
    path = _require_file(path)

    if path.suffix.lower() == '.shp':
        missing = [
            str(path.with_suffix(ext)) for ext in SHAPEFILE_COMPANIONS
            if not path.with_suffix(ext).exists()
        ]
        if missing:
            raise FileNotFoundError(
                f'Shapefile {path.name} is missing companion files: {", ".join(missing)}'
            )

    print(f'\nReading {path}...')
    gdf = gpd.read_file(path)

    if gdf.crs is None and crs_required:
        raise ValueError(
            f'{path.name} has no coordinate reference system.\n'
            f'   Set one explicitly (e.g. a .prj file) before joining or plotting.'
        )

    print(f'  ✓ Loaded {len(gdf):,} features (CRS: {gdf.crs})')
    return gdf


def load_raster(path: PathLike) -> Tuple[np.ma.MaskedArray, dict]:
    """
    Load band 1 of a single-file raster grid

    Returns:
        Tuple of (masked array with nodata masked, rasterio profile)
    """
    path = _require_file(path)
    with rasterio.open(path) as src:
        band = src.read(1, masked=True)
        profile = src.profile.copy()
    print(f'  ✓ Loaded raster {path.name}: {band.shape[1]}x{band.shape[0]} (CRS: {profile.get("crs")})')
    return band, profile

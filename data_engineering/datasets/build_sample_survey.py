#!/usr/bin/env python3
"""
Sample Survey Dataset Builder

Builds a synthetic respondent table (plus matching region polygons) with the
problems the cleaning stages exist for: ineligible respondents, sentinel
ages, unmapped cluster codes, a right-skewed count with zeros and outliers,
missing incomes and missing answers.

Output: data/bronze/survey/survey_responses.csv
        data/bronze/spatial/regions.shp (+ .shx, .dbf, .prj)

Usage:
  python data_engineering/datasets/build_sample_survey.py
  python data_engineering/datasets/build_sample_survey.py --n 5000 --seed 7
"""

import sys
import argparse
from pathlib import Path

import numpy as np
import pandas as pd
import geopandas as gpd
from shapely.geometry import box

# Import paths from config
sys.path.append(str(Path(__file__).parent.parent.parent))
from config.paths import DEFAULT_SURVEY_FILE, DEFAULT_REGIONS_FILE
from config.survey import AGE_SENTINELS, DEFAULT_CRS

# Region name -> (min lon, min lat, max lon, max lat)
REGION_BOXES = {
    'Northwest': (-2.0, 52.0, 0.0, 54.0),
    'Northeast': (0.0, 52.0, 2.0, 54.0),
    'Southwest': (-2.0, 50.0, 0.0, 52.0),
    'Southeast': (0.0, 50.0, 2.0, 52.0),
}

# Probability of answering "Yes" (code 1) per cluster id
YES_PROBABILITY = {1: 0.25, 2: 0.4, 3: 0.55, 4: 0.7, 5: 0.85}


def build_regions(crs: str = DEFAULT_CRS) -> gpd.GeoDataFrame:
    """Region polygons matching REGION_BOXES"""
    return gpd.GeoDataFrame(
        {'region': list(REGION_BOXES)},
        geometry=[box(*bounds) for bounds in REGION_BOXES.values()],
        crs=crs
    )


def build_sample_survey(n: int = 2000, seed: int = 42) -> pd.DataFrame:
    """
    Generate a synthetic respondent table

    Args:
        n: Number of respondents
        seed: Random seed

    Returns:
        DataFrame following config.survey.SURVEY_FIELDS
    """
    rng = np.random.default_rng(seed)

    regions = rng.choice(list(REGION_BOXES), size=n)
    # Code 9 is an unmapped "other" cluster the recode stage must drop
    cluster_id = rng.choice([1, 2, 3, 4, 5, 9], size=n, p=[0.18, 0.22, 0.25, 0.18, 0.14, 0.03])

    age = rng.integers(18, 90, size=n).astype(int)
    sentinel_rows = rng.random(n) < 0.03
    age[sentinel_rows] = rng.choice(AGE_SENTINELS, size=sentinel_rows.sum())

    # Right-skewed count with zeros, plus a handful of heavy users
    trips = rng.poisson(lam=np.where(cluster_id == 9, 2, cluster_id), size=n).astype(float)
    heavy = rng.random(n) < 0.01
    trips[heavy] = rng.integers(40, 80, size=heavy.sum())

    income = np.round(rng.lognormal(mean=10.3, sigma=0.5, size=n) + age.clip(0, 90) * 150, -1)
    income[rng.random(n) < 0.12] = np.nan

    yes_p = np.array([YES_PROBABILITY.get(c, 0.5) for c in cluster_id])
    answer = np.where(rng.random(n) < yes_p, 1.0, 2.0)
    answer[rng.random(n) < 0.05] = np.nan

    lon = np.empty(n)
    lat = np.empty(n)
    for name, (min_lon, min_lat, max_lon, max_lat) in REGION_BOXES.items():
        in_region = regions == name
        lon[in_region] = rng.uniform(min_lon + 0.01, max_lon - 0.01, size=in_region.sum())
        lat[in_region] = rng.uniform(min_lat + 0.01, max_lat - 0.01, size=in_region.sum())
    no_coords = rng.random(n) < 0.02
    lon[no_coords] = np.nan
    lat[no_coords] = np.nan

    return pd.DataFrame({
        'respondent_id': [f'R{i:05d}' for i in range(1, n + 1)],
        'region': regions,
        'eligible_age': (rng.random(n) < 0.93).astype(int),
        'completed_interview': (rng.random(n) < 0.95).astype(int),
        'cluster_id': cluster_id,
        'age': age,
        'trips_per_month': trips,
        'income': income,
        'trust_answer': answer,
        'weight': np.round(rng.gamma(shape=4.0, scale=0.25, size=n), 4),
        'lon': lon,
        'lat': lat,
    })


def main():
    parser = argparse.ArgumentParser(description='Build the synthetic sample survey')
    parser.add_argument('--n', type=int, default=2000, help='Number of respondents')
    parser.add_argument('--seed', type=int, default=42, help='Random seed')
    parser.add_argument('--output', type=Path, default=DEFAULT_SURVEY_FILE, help='Survey CSV path')
    parser.add_argument('--regions-output', type=Path, default=DEFAULT_REGIONS_FILE, help='Regions shapefile path')
    args = parser.parse_args()

    print(f'\n{"="*80}')
    print('BUILDING SAMPLE SURVEY')
    print(f'{"="*80}')

    df = build_sample_survey(args.n, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.output, index=False)
    print(f'  ✓ Wrote {len(df):,} respondents to {args.output}')

    regions = build_regions()
    args.regions_output.parent.mkdir(parents=True, exist_ok=True)
    regions.to_file(args.regions_output)
    print(f'  ✓ Wrote {len(regions)} regions to {args.regions_output}')
    return 0


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python3
"""
Generate All Figures

Runs the survey pipeline on a respondent table and renders every figure:
- Weighted share bar chart (PNG) and its interactive version (HTML)
- Age vs income scatterplot (PNG) and animated scatter by region (HTML)
- Animated share chart stepping through regions (GIF + HTML)
- Histograms of the count variable before and after skew correction (HTML)
- Regional choropleth (PNG + HTML), when a regions layer is given

Usage:
    python analysis/reports/generate_all_figures.py --input data/bronze/survey/survey_responses.csv

    # With a regions layer for the maps
    python analysis/reports/generate_all_figures.py --regions data/bronze/spatial/regions.shp
"""

import sys
import argparse
from pathlib import Path
from typing import Dict, Optional

import geopandas as gpd

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from config.paths import DEFAULT_SURVEY_FILE, FIGURES
from config.survey import (
    AGE_COL, INCOME_COL, COUNT_COL, ANSWER_COL, CLUSTER_LABEL_COL, GROUP_COL, WEIGHT_COL,
)
from data_engineering.pipeline import PipelineResult, run_survey_pipeline
from data_engineering.load import load_survey_csv, load_vector
from data_engineering.spatial import points_from_frame, spatial_join
from data_engineering.aggregate import weighted_shares
from analysis.charts import plot_share_bars, plot_scatter, animate_share_bars
from analysis.interactive import (
    create_share_bar_chart, create_animated_share_chart, create_animated_scatter,
    create_feature_histogram,
)
from analysis.maps import plot_choropleth, create_choropleth_map

FOCUS_ANSWER = 'Yes'


def regional_answer_shares(
    imputed,
    regions: gpd.GeoDataFrame,
    region_key: str,
    answer: str = FOCUS_ANSWER
) -> gpd.GeoDataFrame:
    """
    Join respondents to region polygons and attach the weighted share of `answer`

    Returns:
        Region polygons with a 'share' column (float, NaN where undefined)
    """
    points = points_from_frame(imputed)
    # Polygon membership replaces any self-reported region of the same name
    points = points.drop(columns=[region_key], errors='ignore')
    joined = spatial_join(points, regions[[region_key, 'geometry']], how='inner', predicate='within')

    shares = weighted_shares(joined, region_key, ANSWER_COL, weight=WEIGHT_COL)
    focus = shares[shares[ANSWER_COL].astype(str) == answer][[region_key, 'share']]

    out = regions.merge(focus, on=region_key, how='left')
    out['share'] = out['share'].astype(float)
    return out


def render_all(
    result: PipelineResult,
    output_dir: Path = FIGURES,
    regions: Optional[gpd.GeoDataFrame] = None,
    region_key: str = GROUP_COL
) -> Dict[str, Path]:
    """Render every figure for a pipeline result; returns name -> path"""
    if result.is_empty:
        print('⚠️  Nothing to render: pipeline result is empty')
        return {}

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = {}

    print('\n' + '=' * 80)
    print('RENDERING FIGURES')
    print('=' * 80)

    paths['share_bars'] = plot_share_bars(
        result.shares, CLUSTER_LABEL_COL, ANSWER_COL,
        output_dir / 'share_by_cluster.png',
        title='Trust by Engagement Cluster'
    )

    paths['scatter'] = plot_scatter(
        result.imputed, AGE_COL, INCOME_COL,
        output_dir / 'age_vs_income.png',
        hue=CLUSTER_LABEL_COL
    )

    focus = result.region_shares[result.region_shares[ANSWER_COL].astype(str) == FOCUS_ANSWER]
    paths['animated_shares'] = animate_share_bars(
        focus, GROUP_COL, CLUSTER_LABEL_COL,
        output_dir / 'share_by_cluster_by_region.gif',
        title=f'Share answering {FOCUS_ANSWER}'
    )

    share_fig = create_share_bar_chart(result.shares, CLUSTER_LABEL_COL, ANSWER_COL)
    paths['share_bars_html'] = output_dir / 'share_by_cluster.html'
    share_fig.write_html(paths['share_bars_html'])

    animated_fig = create_animated_share_chart(focus, GROUP_COL, CLUSTER_LABEL_COL)
    paths['animated_shares_html'] = output_dir / 'share_by_cluster_by_region.html'
    animated_fig.write_html(paths['animated_shares_html'])

    scatter_fig = create_animated_scatter(
        result.imputed, AGE_COL, INCOME_COL, GROUP_COL, color=CLUSTER_LABEL_COL
    )
    paths['scatter_html'] = output_dir / 'age_vs_income_by_region.html'
    scatter_fig.write_html(paths['scatter_html'])

    # Count before and after skew correction
    added = [c for c in result.transformed.columns if c not in result.recoded.columns]
    for col in [COUNT_COL, *added]:
        key = f'{col}_histogram_html'
        paths[key] = output_dir / f'{col}_histogram.html'
        create_feature_histogram(result.transformed, col).write_html(paths[key])

    if regions is not None:
        regional = regional_answer_shares(result.imputed, regions, region_key)
        paths['choropleth'] = plot_choropleth(
            regional, 'share', output_dir / 'share_by_region.png',
            title=f'Share answering {FOCUS_ANSWER} (%)'
        )
        folium_map = create_choropleth_map(regional, region_key, 'share', legend_name=f'% {FOCUS_ANSWER}')
        paths['choropleth_html'] = output_dir / 'share_by_region.html'
        folium_map.save(str(paths['choropleth_html']))

    print(f'\n✅ Rendered {len(paths)} figures to {output_dir}')
    return paths


def main():
    parser = argparse.ArgumentParser(
        description='Run the survey pipeline and generate all figures',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--input', type=Path, default=DEFAULT_SURVEY_FILE, help='Survey CSV')
    parser.add_argument('--regions', type=Path, help='Region polygons (shapefile / GeoPackage)')
    parser.add_argument('--region-key', default=GROUP_COL, help='Region name column in the regions layer')
    parser.add_argument('--output-dir', type=Path, default=FIGURES, help='Where figures are written')
    args = parser.parse_args()

    try:
        raw = load_survey_csv(args.input)
        regions = load_vector(args.regions) if args.regions else None
        result = run_survey_pipeline(raw)
        render_all(result, args.output_dir, regions, args.region_key)
    except Exception as e:
        print(f'\n❌ Figure generation failed: {e}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

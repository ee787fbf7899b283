#!/usr/bin/env python3
"""
Master Pipeline Orchestration Script

Runs the complete survey pipeline:
1. Load and validate the respondent table (CSV or Stata)
2. Filter, recode, correct skew, report outliers
3. Impute missing values (random forest or median/mode)
4. Aggregate weighted shares and means
5. Write silver/gold tables and render figures

Usage:
    # Full pipeline on the default bronze file
    python scripts/run_pipeline.py

    # Stata input, median/mode substitution instead of the random forest
    python scripts/run_pipeline.py --input wave1.dta --imputation central

    # Tables only
    python scripts/run_pipeline.py --skip-figures
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT))

from config.paths import (
    ensure_directories, DEFAULT_SURVEY_FILE, SILVER_SURVEY, GOLD_AGGREGATES, FIGURES,
)
from config.survey import GROUP_COL
from data_engineering.load import load_survey_csv, load_survey_stata, load_vector
from data_engineering.pipeline import PipelineConfig, run_survey_pipeline, print_header


def load_input(path: Path):
    """Pick the loader from the file extension"""
    if path.suffix.lower() == '.dta':
        return load_survey_stata(path)
    return load_survey_csv(path)


def save_tables(result, silver_dir: Path, gold_dir: Path):
    """Write the imputed respondent table and the aggregates"""
    silver_dir.mkdir(parents=True, exist_ok=True)
    gold_dir.mkdir(parents=True, exist_ok=True)

    outputs = {
        silver_dir / 'respondents_clean.csv': result.imputed,
        gold_dir / 'outlier_report.csv': result.outliers,
        gold_dir / 'shares_by_cluster.csv': result.shares,
        gold_dir / 'shares_by_region_cluster.csv': result.region_shares,
        gold_dir / 'weighted_means_long.csv': result.long,
    }
    for path, table in outputs.items():
        table.to_csv(path, index=False)
        print(f'  ✓ Saved {path} ({len(table):,} rows)')


def main():
    """Main pipeline orchestration"""
    parser = argparse.ArgumentParser(
        description='Run the complete survey cleaning pipeline',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build sample data first
  python data_engineering/datasets/build_sample_survey.py

  # Full pipeline with regional maps
  python scripts/run_pipeline.py --regions data/bronze/spatial/regions.shp
        """
    )
    parser.add_argument('--input', type=Path, default=DEFAULT_SURVEY_FILE, help='Survey file (.csv or .dta)')
    parser.add_argument(
        '--imputation',
        choices=['model', 'central'],
        default='model',
        help='Random-forest imputation or median/mode substitution'
    )
    parser.add_argument('--skew-method', choices=['log', 'sqrt'], help='Force a skew transform')
    parser.add_argument('--regions', type=Path, help='Region polygons for the maps')
    parser.add_argument('--region-key', default=GROUP_COL, help='Region name column in the regions layer')
    parser.add_argument('--skip-figures', action='store_true', help='Write tables only')
    args = parser.parse_args()

    print_header('SURVEY CLEANING - DATA PIPELINE')
    start_time = datetime.now()
    print(f'Started: {start_time.strftime("%Y-%m-%d %H:%M:%S")}')
    print(f'Imputation: {args.imputation}')

    ensure_directories()

    try:
        raw = load_input(args.input)
        regions = load_vector(args.regions) if args.regions else None

        config = PipelineConfig(imputation=args.imputation, skew_method=args.skew_method)
        result = run_survey_pipeline(raw, config)

        if result.is_empty:
            print('\n⚠️  No eligible respondents - nothing to save')
            return 0

        print_header('SAVING TABLES')
        save_tables(result, SILVER_SURVEY, GOLD_AGGREGATES)

        if not args.skip_figures:
            from analysis.reports.generate_all_figures import render_all
            render_all(result, FIGURES, regions, args.region_key)
    except Exception as e:
        print(f'\n✗ Pipeline failed: {type(e).__name__}: {e}')
        return 1

    duration = datetime.now() - start_time
    print_header('PIPELINE SUMMARY')
    print(f'Duration: {duration}')
    print('✓ PIPELINE COMPLETED SUCCESSFULLY')
    print()
    print('Next steps:')
    print('  Launch dashboard: streamlit run app/app.py')
    print()
    return 0


if __name__ == '__main__':
    sys.exit(main())

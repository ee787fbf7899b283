"""
Project Path Configuration

Centralized path definitions for data and rendered outputs
Using Medallion Architecture: Bronze (raw) → Silver (cleaned) → Gold (aggregated)
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# ==============================================================================
# MEDALLION ARCHITECTURE (Bronze / Silver / Gold)
# ==============================================================================

DATA_ROOT = PROJECT_ROOT / "data"

# Bronze Layer: Raw survey exports and spatial files (as delivered)
BRONZE = DATA_ROOT / "bronze"
BRONZE_SURVEY = BRONZE / "survey"
BRONZE_SPATIAL = BRONZE / "spatial"

# Silver Layer: Filtered, recoded, imputed respondent tables
SILVER = DATA_ROOT / "silver"
SILVER_SURVEY = SILVER / "survey"

# Gold Layer: Weighted aggregates ready for rendering
GOLD = DATA_ROOT / "gold"
GOLD_AGGREGATES = GOLD / "aggregates"

# ==============================================================================
# DEFAULT FILES
# ==============================================================================

DEFAULT_SURVEY_FILE = BRONZE_SURVEY / "survey_responses.csv"
DEFAULT_REGIONS_FILE = BRONZE_SPATIAL / "regions.shp"

# ==============================================================================
# OUTPUTS
# ==============================================================================

OUTPUTS_ROOT = PROJECT_ROOT / "outputs"
FIGURES = OUTPUTS_ROOT / "figures"


def ensure_directories():
    """Create all necessary directories if they don't exist"""
    all_dirs = [
        BRONZE, BRONZE_SURVEY, BRONZE_SPATIAL,
        SILVER, SILVER_SURVEY,
        GOLD, GOLD_AGGREGATES,
        OUTPUTS_ROOT, FIGURES,
    ]
    for directory in all_dirs:
        directory.mkdir(parents=True, exist_ok=True)


"""
Survey domain constants

Column names, code tables and fixed orderings shared by the cleaning,
aggregation and rendering stages.
"""

# ==============================================================================
# COLUMNS
# ==============================================================================

ID_COL = 'respondent_id'
GROUP_COL = 'region'
CLUSTER_ID_COL = 'cluster_id'
CLUSTER_LABEL_COL = 'cluster'
AGE_COL = 'age'
COUNT_COL = 'trips_per_month'
INCOME_COL = 'income'
ANSWER_COL = 'trust_answer'
WEIGHT_COL = 'weight'
LON_COL = 'lon'
LAT_COL = 'lat'

# Both flags must equal 1 for a respondent to be in scope
ELIGIBILITY_FLAGS = ['eligible_age', 'completed_interview']

# Survey-package codes for "refused" / "don't know" / "not asked"
AGE_SENTINELS = [-9, -8, -1, 999]

# ==============================================================================
# CLUSTER LABELS
# ==============================================================================

# Segmentation cluster id -> label. Order below is fixed for every chart axis.
CLUSTER_LABELS = {
    1: 'Disengaged',
    2: 'Casual',
    3: 'Moderate',
    4: 'Engaged',
    5: 'Highly engaged',
}

CLUSTER_ORDER = [CLUSTER_LABELS[k] for k in sorted(CLUSTER_LABELS)]

ANSWER_LABELS = {
    1: 'Yes',
    2: 'No',
}

# ==============================================================================
# SCHEMA (field name -> semantic type)
# ==============================================================================

SURVEY_FIELDS = {
    ID_COL: 'identifier',
    GROUP_COL: 'group',
    'eligible_age': 'flag',
    'completed_interview': 'flag',
    CLUSTER_ID_COL: 'code',
    AGE_COL: 'continuous',
    COUNT_COL: 'count',
    INCOME_COL: 'continuous',
    ANSWER_COL: 'categorical',
    WEIGHT_COL: 'weight',
    LON_COL: 'coordinate',
    LAT_COL: 'coordinate',
}

# ==============================================================================
# SPATIAL
# ==============================================================================

DEFAULT_CRS = 'EPSG:4326'
# Metric projection used for distance-based joins
METRIC_CRS = 'EPSG:3857'

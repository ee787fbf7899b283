import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from data_engineering.datasets.build_sample_survey import build_sample_survey, build_regions


@pytest.fixture
def respondents():
    """Small hand-written respondent table covering every cleaning case"""
    return pd.DataFrame({
        'respondent_id': ['R1', 'R2', 'R3', 'R4', 'R5', 'R6', 'R7', 'R8'],
        'region': ['North', 'North', 'South', 'South', 'North', 'South', 'North', 'South'],
        'eligible_age': [1, 1, 1, 0, 1, 1, 1, 1],
        'completed_interview': [1, 1, 1, 1, 0, 1, 1, 1],
        'cluster_id': [1, 2, 3, 4, 5, 9, 5, 2],
        'age': [34.0, 999.0, 51.0, 28.0, 45.0, 60.0, 39.0, -9.0],
        'trips_per_month': [0.0, 1.0, 2.0, 2.0, 3.0, 20.0, 4.0, 1.0],
        'income': [32000.0, np.nan, 41000.0, 29000.0, np.nan, 55000.0, 47000.0, 30000.0],
        'trust_answer': [1.0, 2.0, 1.0, np.nan, 2.0, 1.0, 1.0, 2.0],
        'weight': [1.2, 0.8, 1.0, 1.5, 0.9, 1.1, 1.3, 0.7],
        'lon': [-1.0, 1.0, -1.0, 1.0, -0.5, 0.5, -1.5, 1.5],
        'lat': [53.0, 53.0, 51.0, 51.0, 52.5, 50.5, 53.5, 50.5],
    })


@pytest.fixture(scope='session')
def sample_survey():
    return build_sample_survey(n=400, seed=7)


@pytest.fixture(scope='session')
def sample_regions():
    return build_regions()

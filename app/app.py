"""
Survey Trust Dashboard

One input (region) per session; the share chart is recomputed whenever it
changes. The cleaned table is computed once and cached.

Run: streamlit run app/app.py
"""

import sys
from pathlib import Path

import streamlit as st
import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.app_config import PAGE_CONFIG, CUSTOM_CSS, DATA_PATH, ALL_REGIONS
from config.survey import ANSWER_COL, CLUSTER_LABEL_COL, GROUP_COL, WEIGHT_COL
from data_engineering.load import load_survey_csv
from data_engineering.pipeline import run_survey_pipeline
from data_engineering.aggregate import weighted_shares
from analysis.interactive import create_share_bar_chart


@st.cache_data(ttl=3600)
def load_clean_respondents(path: str) -> pd.DataFrame:
    """Run the pipeline once and keep the imputed respondent table"""
    result = run_survey_pipeline(load_survey_csv(path))
    if result.is_empty:
        return result.recoded
    return result.imputed


def respondents_in_region(df: pd.DataFrame, region: str) -> pd.DataFrame:
    """All respondents, or only those in `region`"""
    if region == ALL_REGIONS:
        return df
    return df[df[GROUP_COL] == region]


# Page configuration
st.set_page_config(**PAGE_CONFIG)
st.markdown(CUSTOM_CSS, unsafe_allow_html=True)

st.markdown('<h1 class="main-header">📊 Survey Trust Dashboard</h1>', unsafe_allow_html=True)
st.markdown("**Weighted share of respondents answering each option, by engagement cluster**")
st.markdown("---")

if not Path(DATA_PATH).exists():
    st.error(
        f"Survey file not found: {DATA_PATH}\n\n"
        f"Build sample data with `python data_engineering/datasets/build_sample_survey.py`."
    )
    st.stop()

with st.spinner("Cleaning survey data..."):
    respondents = load_clean_respondents(str(DATA_PATH))

if respondents.empty:
    st.warning("No eligible respondents in the survey file.")
    st.stop()

# Input
regions = [ALL_REGIONS] + sorted(respondents[GROUP_COL].dropna().unique().tolist())
region = st.sidebar.selectbox("Region", regions)

# Output
subset = respondents_in_region(respondents, region)
shares = weighted_shares(subset, CLUSTER_LABEL_COL, ANSWER_COL, weight=WEIGHT_COL)

col1, col2 = st.columns(2)
with col1:
    st.metric("Respondents", f"{len(subset):,}")
with col2:
    st.metric("Weighted total", f"{subset[WEIGHT_COL].sum():,.1f}")

undefined = shares[shares['share_status'] == 'undefined']
if not undefined.empty:
    st.warning(f"Share undefined (zero total weight) for: {undefined[CLUSTER_LABEL_COL].astype(str).unique().tolist()}")

fig = create_share_bar_chart(shares, CLUSTER_LABEL_COL, ANSWER_COL, title=f'Answers by Cluster - {region}')
st.plotly_chart(fig, use_container_width=True)

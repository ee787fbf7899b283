"""
Streamlit dashboard for the survey pipeline.
"""

"""
Configuration for the Survey Dashboard
"""

from config.paths import DEFAULT_SURVEY_FILE

# Page configuration
PAGE_CONFIG = {
    "page_title": "Survey Trust Dashboard",
    "page_icon": "📊",
    "layout": "wide",
    "initial_sidebar_state": "expanded"
}

DATA_PATH = DEFAULT_SURVEY_FILE

ALL_REGIONS = "All regions"

# Custom CSS styling
CUSTOM_CSS = """
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        color: #2c3e50;
        margin-bottom: 0.5rem;
    }

    .stMetric {
        background-color: #f8f9fa;
        padding: 15px;
        border-radius: 8px;
        border-left: 4px solid #3498db;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
"""

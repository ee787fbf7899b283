"""
Analysis Module

Rendering of aggregate tables

Modules:
- charts: Static PNG and animated GIF charts (matplotlib / seaborn)
- interactive: Plotly charts
- maps: Choropleths (geopandas) and folium maps
- reports: Figure generation script
"""

__version__ = "1.0.0"

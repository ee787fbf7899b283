"""
Map rendering: static choropleths (geopandas/matplotlib) and interactive
folium maps
"""

from pathlib import Path
from typing import List, Optional, Union

import folium
import geopandas as gpd
import matplotlib.pyplot as plt

from config.survey import DEFAULT_CRS


def plot_choropleth(
    gdf: gpd.GeoDataFrame,
    column: str,
    output_path: Union[str, Path],
    title: Optional[str] = None,
    cmap: str = 'Blues'
) -> Path:
    """
    Static choropleth of `column` saved as PNG

    Features with a missing value are drawn in light grey.
    """
    if gdf.crs is None:
        raise ValueError('Layer has no CRS; set one before plotting')

    fig, ax = plt.subplots(figsize=(10, 8))
    gdf.plot(
        column=column,
        cmap=cmap,
        legend=True,
        edgecolor='black',
        linewidth=0.5,
        missing_kwds={'color': 'lightgrey', 'label': 'No data'},
        ax=ax
    )
    ax.set_title(title or column, fontsize=14, fontweight='bold')
    ax.set_axis_off()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f'  ✓ Saved {output_path}')
    return output_path


def create_choropleth_map(
    gdf: gpd.GeoDataFrame,
    key_col: str,
    value_col: str,
    tooltip_cols: Optional[List[str]] = None,
    zoom_start: int = 6,
    legend_name: Optional[str] = None
) -> folium.Map:
    """
    Create an interactive choropleth map

    Args:
        gdf: Polygon layer with a CRS
        key_col: Column identifying each polygon
        value_col: Column to color by
        tooltip_cols: Columns shown on hover (default: key and value)
        zoom_start: Initial zoom level
        legend_name: Legend caption

    Returns:
        Folium map object
    """
    if gdf.crs is None:
        raise ValueError('Layer has no CRS; set one before mapping')

    # Folium expects longitude/latitude
    gdf_wgs84 = gdf.to_crs(DEFAULT_CRS)
    bounds = gdf_wgs84.total_bounds
    center = [(bounds[1] + bounds[3]) / 2, (bounds[0] + bounds[2]) / 2]

    m = folium.Map(location=center, zoom_start=zoom_start, tiles='OpenStreetMap')

    folium.Choropleth(
        geo_data=gdf_wgs84.to_json(),
        data=gdf_wgs84[[key_col, value_col]],
        columns=[key_col, value_col],
        key_on=f'feature.properties.{key_col}',
        fill_color='Blues',
        fill_opacity=0.7,
        line_opacity=0.4,
        nan_fill_color='lightgrey',
        legend_name=legend_name or value_col
    ).add_to(m)

    tooltip_cols = tooltip_cols or [key_col, value_col]
    folium.GeoJson(
        gdf_wgs84[tooltip_cols + ['geometry']].to_json(),
        style_function=lambda feature: {'fillOpacity': 0, 'weight': 0},
        tooltip=folium.GeoJsonTooltip(fields=tooltip_cols)
    ).add_to(m)

    return m

"""
Interactive charts (plotly)

Same contract as analysis.charts: category order is passed through via
`category_orders`, shares must already be integers.
"""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
import warnings
from typing import Optional

from analysis.charts import require_integer_shares, category_order, CHART_COLORS

# Suppress specific warnings
warnings.filterwarnings('ignore', category=FutureWarning, module='plotly')

PLOTLY_THEME = 'plotly_white'


def create_share_bar_chart(
    shares: pd.DataFrame,
    x: str,
    color: str,
    share_col: str = 'share',
    title: str = 'Weighted Share by Cluster'
) -> go.Figure:
    """
    Create a grouped bar chart of weighted shares

    Args:
        shares: Output of weighted_shares
        x: Column on the x axis
        color: Category column
        share_col: Integer share column
        title: Chart title

    Returns:
        Plotly figure
    """
    require_integer_shares(shares, share_col)
    plot_df = shares[shares[share_col].notna()].copy()
    plot_df[share_col] = plot_df[share_col].astype(int)
    plot_df[x] = plot_df[x].astype(str)
    plot_df[color] = plot_df[color].astype(str)

    fig = px.bar(
        plot_df,
        x=x,
        y=share_col,
        color=color,
        barmode='group',
        text=share_col,
        category_orders={
            x: [str(c) for c in category_order(shares[x])],
            color: [str(c) for c in category_order(shares[color])],
        },
        color_discrete_sequence=CHART_COLORS,
        labels={share_col: 'Weighted share (%)'},
        title=title,
        template=PLOTLY_THEME
    )
    fig.update_traces(texttemplate='%{text}%', textposition='outside')
    fig.update_layout(height=450, yaxis_range=[0, 105])
    return fig


def create_animated_share_chart(
    shares: pd.DataFrame,
    frame_col: str,
    x: str,
    share_col: str = 'share',
    title: str = 'Weighted Share'
) -> go.Figure:
    """Bar chart with a play button stepping through `frame_col`"""
    require_integer_shares(shares, share_col)
    plot_df = shares[shares[share_col].notna()].copy()
    plot_df[share_col] = plot_df[share_col].astype(int)
    for col in (x, frame_col):
        plot_df[col] = plot_df[col].astype(str)

    fig = px.bar(
        plot_df,
        x=x,
        y=share_col,
        animation_frame=frame_col,
        category_orders={
            x: [str(c) for c in category_order(shares[x])],
            frame_col: [str(c) for c in category_order(shares[frame_col])],
        },
        color_discrete_sequence=CHART_COLORS,
        range_y=[0, 105],
        title=title,
        template=PLOTLY_THEME
    )
    fig.update_layout(height=450)
    return fig


def create_animated_scatter(
    df: pd.DataFrame,
    x: str,
    y: str,
    frame_col: str,
    color: Optional[str] = None,
    size: Optional[str] = None,
    title: Optional[str] = None
) -> go.Figure:
    """
    Scatterplot animated over `frame_col`

    Args:
        df: Respondent or aggregate table
        x: X axis column
        y: Y axis column
        frame_col: Column whose values become animation frames
        color: Optional category column (order preserved)
        size: Optional marker size column
        title: Chart title

    Returns:
        Plotly figure
    """
    category_orders = {frame_col: category_order(df[frame_col])}
    if color:
        category_orders[color] = category_order(df[color])

    fig = px.scatter(
        df,
        x=x,
        y=y,
        animation_frame=frame_col,
        color=color,
        size=size,
        category_orders=category_orders,
        range_x=[df[x].min(), df[x].max()],
        range_y=[df[y].min(), df[y].max()],
        title=title or f'{y} vs {x}',
        template=PLOTLY_THEME
    )
    fig.update_layout(height=500)
    return fig


def create_feature_histogram(df: pd.DataFrame, feature: str,
                             bins: int = 50, title: Optional[str] = None) -> go.Figure:
    """
    Create a histogram for a feature (e.g. before/after skew correction)

    Args:
        df: DataFrame with feature
        feature: Name of feature
        bins: Number of bins
        title: Chart title

    Returns:
        Plotly figure
    """
    if title is None:
        title = f'Distribution of {feature}'

    fig = go.Figure(data=[go.Histogram(
        x=df[feature].dropna(),
        nbinsx=bins,
        marker=dict(color='#3498db', line=dict(color='white', width=1))
    )])

    fig.update_layout(
        title=title,
        xaxis_title=feature,
        yaxis_title='Count',
        height=400,
        showlegend=False,
        template=PLOTLY_THEME
    )

    return fig

"""
Static and animated charts (matplotlib / seaborn)

Renderers consume aggregate tables as they are: category order and label
text come from the data (ordered categoricals keep their fixed order) and
percentage shares must already be integers.
"""

from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from matplotlib.animation import FuncAnimation, PillowWriter
from pandas.api.types import is_integer_dtype

PathLike = Union[str, Path]

# Chart Color Palette
CHART_COLORS = [
    '#3498db',  # Blue
    '#e74c3c',  # Red
    '#2ecc71',  # Green
    '#f39c12',  # Orange
    '#9b59b6',  # Purple
]


def require_integer_shares(df: pd.DataFrame, share_col: str = 'share'):
    """Raise ValueError unless `share_col` holds integer percentages"""
    if share_col not in df.columns:
        raise ValueError(f'Column {share_col!r} not found')
    if not is_integer_dtype(df[share_col]):
        raise ValueError(
            f'{share_col} must hold integer percentages (got {df[share_col].dtype}); '
            f'round shares in the aggregation stage first'
        )


def category_order(series: pd.Series) -> List:
    """Fixed order for ordered/unordered categoricals, first-seen order otherwise"""
    if isinstance(series.dtype, pd.CategoricalDtype):
        return list(series.cat.categories)
    return list(dict.fromkeys(series.dropna()))


def _defined(df: pd.DataFrame, share_col: str) -> pd.DataFrame:
    plot_df = df[df[share_col].notna()].copy()
    plot_df[share_col] = plot_df[share_col].astype(int)
    return plot_df


def _save(fig, output_path: PathLike) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f'  ✓ Saved {output_path}')
    return output_path


def plot_share_bars(
    shares: pd.DataFrame,
    x: str,
    hue: str,
    output_path: PathLike,
    share_col: str = 'share',
    title: str = 'Weighted Share by Cluster'
) -> Path:
    """
    Grouped bar chart of integer weighted shares saved as PNG

    Args:
        shares: Output of weighted_shares
        x: Column on the x axis (e.g. cluster label)
        hue: Category column (bars within each x)
        output_path: PNG path
        share_col: Integer share column
        title: Chart title

    Returns:
        Path to saved image
    """
    require_integer_shares(shares, share_col)
    plot_df = _defined(shares, share_col)

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(
        data=plot_df,
        x=x,
        y=share_col,
        hue=hue,
        order=category_order(shares[x]),
        hue_order=category_order(shares[hue]),
        palette=CHART_COLORS[:len(category_order(shares[hue]))],
        ax=ax
    )
    for container in ax.containers:
        ax.bar_label(container, fmt='%d%%', fontsize=9)

    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.set_xlabel(x.replace('_', ' ').title())
    ax.set_ylabel('Weighted share (%)')
    ax.set_ylim(0, 105)
    ax.grid(axis='y', alpha=0.3)

    return _save(fig, output_path)


def plot_scatter(
    df: pd.DataFrame,
    x: str,
    y: str,
    output_path: PathLike,
    hue: Optional[str] = None,
    title: Optional[str] = None
) -> Path:
    """Scatterplot saved as PNG; `hue` keeps its category order"""
    fig, ax = plt.subplots(figsize=(9, 6))
    sns.scatterplot(
        data=df,
        x=x,
        y=y,
        hue=hue,
        hue_order=category_order(df[hue]) if hue else None,
        alpha=0.6,
        ax=ax
    )
    ax.set_title(title or f'{y} vs {x}', fontsize=14, fontweight='bold')
    ax.grid(alpha=0.3)
    return _save(fig, output_path)


def animate_share_bars(
    shares: pd.DataFrame,
    frame_col: str,
    x: str,
    output_path: PathLike,
    share_col: str = 'share',
    fps: int = 1,
    title: str = 'Weighted Share'
) -> Path:
    """
    Animated bar chart (GIF): one frame per value of `frame_col`

    The x axis keeps the same category order in every frame; categories
    absent from a frame are drawn at 0.
    """
    require_integer_shares(shares, share_col)
    plot_df = _defined(shares, share_col)
    order = category_order(shares[x])
    frames = category_order(shares[frame_col])
    if not frames:
        raise ValueError(f'No frames: {frame_col} has no values')

    fig, ax = plt.subplots(figsize=(10, 6))

    def draw(frame_value):
        ax.clear()
        frame = plot_df[plot_df[frame_col] == frame_value]
        heights = frame.groupby(x, observed=False)[share_col].sum().reindex(order, fill_value=0)
        bars = ax.bar([str(o) for o in order], heights.values, color=CHART_COLORS[0])
        ax.bar_label(bars, fmt='%d%%')
        ax.set_ylim(0, 105)
        ax.set_ylabel('Weighted share (%)')
        ax.set_title(f'{title} - {frame_value}', fontsize=14, fontweight='bold')
        return bars

    animation = FuncAnimation(fig, draw, frames=frames, repeat=True)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    animation.save(output_path, writer=PillowWriter(fps=fps))
    plt.close(fig)
    print(f'  ✓ Saved {output_path} ({len(frames)} frames)')
    return output_path

import pandas as pd
import pytest

from analysis.charts import (
    require_integer_shares, category_order, plot_share_bars, plot_scatter, animate_share_bars,
)
from analysis.interactive import create_share_bar_chart, create_animated_share_chart
from analysis.maps import plot_choropleth, create_choropleth_map
from analysis.reports.generate_all_figures import render_all, regional_answer_shares
from data_engineering.pipeline import PipelineConfig, run_survey_pipeline

ORDER = ['Disengaged', 'Casual', 'Moderate']


@pytest.fixture
def shares():
    return pd.DataFrame({
        'cluster': pd.Categorical(
            ['Casual', 'Casual', 'Disengaged', 'Disengaged', 'Moderate', 'Moderate'],
            categories=ORDER, ordered=True
        ),
        'answer': ['Yes', 'No'] * 3,
        'region': ['North'] * 6,
        'share': pd.array([60, 40, 25, 75, pd.NA, pd.NA], dtype='Int64'),
    })


def test_float_shares_rejected(shares):
    shares['share'] = shares['share'].astype(float)
    with pytest.raises(ValueError, match='integer percentages'):
        require_integer_shares(shares)
    with pytest.raises(ValueError):
        create_share_bar_chart(shares, 'cluster', 'answer')


def test_category_order(shares):
    assert category_order(shares['cluster']) == ORDER
    assert category_order(shares['answer']) == ['Yes', 'No']


def test_share_bars_png(tmp_path, shares):
    path = plot_share_bars(shares, 'cluster', 'answer', tmp_path / 'bars.png')
    assert path.exists() and path.stat().st_size > 0


def test_scatter_png(tmp_path, respondents):
    path = plot_scatter(respondents, 'age', 'income', tmp_path / 'scatter.png', hue='region')
    assert path.exists()


def test_animated_gif(tmp_path, shares):
    shares = pd.concat([shares, shares.assign(region='South')], ignore_index=True)
    path = animate_share_bars(shares, 'region', 'cluster', tmp_path / 'bars.gif')
    assert path.read_bytes()[:3] == b'GIF'


def test_plotly_keeps_fixed_order(shares):
    fig = create_share_bar_chart(shares, 'cluster', 'answer')
    assert list(fig.layout.xaxis.categoryarray) == ORDER

    animated = create_animated_share_chart(shares, 'region', 'cluster')
    assert len(animated.frames) == 1


def test_maps(tmp_path, sample_regions):
    regions = sample_regions.assign(share=[10.0, 20.0, None, 40.0])
    assert plot_choropleth(regions, 'share', tmp_path / 'map.png').exists()

    folium_map = create_choropleth_map(regions, 'region', 'share')
    folium_map.save(str(tmp_path / 'map.html'))
    assert (tmp_path / 'map.html').exists()


def test_render_all(tmp_path, sample_survey, sample_regions):
    result = run_survey_pipeline(sample_survey, PipelineConfig(imputation='central'))

    paths = render_all(result, tmp_path, regions=sample_regions)

    expected = {
        'share_bars', 'scatter', 'animated_shares', 'share_bars_html',
        'animated_shares_html', 'scatter_html', 'choropleth', 'choropleth_html',
        'trips_per_month_histogram_html', 'trips_per_month_sqrt_histogram_html',
    }
    assert set(paths) == expected
    assert all(p.exists() for p in paths.values())


def test_regional_shares_use_polygon_membership(sample_survey, sample_regions):
    result = run_survey_pipeline(sample_survey, PipelineConfig(imputation='central'))
    regional = regional_answer_shares(result.imputed, sample_regions, 'region')

    assert len(regional) == 4
    assert regional['share'].between(0, 100).all()


def test_render_nothing_for_empty_result(tmp_path, respondents):
    respondents['eligible_age'] = 0
    result = run_survey_pipeline(respondents)
    assert render_all(result, tmp_path) == {}

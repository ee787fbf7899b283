import numpy as np
import pandas as pd
import pytest

from data_engineering.pipeline import PipelineConfig, run_survey_pipeline


def test_invalid_imputation_method():
    with pytest.raises(ValueError, match='imputation'):
        PipelineConfig(imputation='mean')


def test_small_table_end_to_end(respondents):
    before = respondents.copy()

    result = run_survey_pipeline(respondents, PipelineConfig(imputation='central'))

    pd.testing.assert_frame_equal(respondents, before)
    assert result.eligible['respondent_id'].tolist() == ['R1', 'R2', 'R3', 'R6', 'R7', 'R8']
    assert result.recoded['respondent_id'].tolist() == ['R1', 'R3', 'R7']
    assert 'trips_per_month_sqrt' in result.transformed.columns
    assert set(result.outliers['column']) == {'trips_per_month', 'income'}

    shares = result.shares.set_index('cluster')
    assert (shares['share'] == 100).all()
    assert str(result.shares['share'].dtype) == 'Int64'


def test_model_imputation_on_sample(sample_survey):
    result = run_survey_pipeline(sample_survey, PipelineConfig(imputation='model'))

    assert result.imputed['income'].isna().sum() == 0
    assert result.transformed['income'].isna().sum() > 0
    totals = result.shares.groupby('cluster', observed=True)['share'].sum()
    assert ((totals - 100).abs() <= 1).all()
    assert list(result.means.columns) == ['cluster', 'income', 'trips_per_month']
    assert set(result.long['measure']) == {'income', 'trips_per_month'}


def test_central_imputation_on_sample(sample_survey):
    result = run_survey_pipeline(sample_survey, PipelineConfig(imputation='central'))
    observed = result.transformed['income'].dropna()
    filled = result.imputed.loc[result.transformed['income'].isna(), 'income']
    assert (filled == observed.median()).all()


def test_cluster_order_is_fixed(sample_survey):
    result = run_survey_pipeline(sample_survey, PipelineConfig(imputation='central'))
    order = list(result.recoded['cluster'].cat.categories)
    assert order == ['Disengaged', 'Casual', 'Moderate', 'Engaged', 'Highly engaged']
    seen = list(dict.fromkeys(result.shares['cluster'].astype(str)))
    assert seen == [c for c in order if c in seen]


def test_empty_after_filtering_stops_early(respondents):
    respondents['completed_interview'] = 0
    result = run_survey_pipeline(respondents)

    assert result.is_empty
    assert result.transformed is None
    assert result.shares is None


def test_sample_contains_problem_rows(sample_survey):
    assert (sample_survey['cluster_id'] == 9).any()
    assert sample_survey['income'].isna().any()
    assert sample_survey['trust_answer'].isna().any()
    assert sample_survey['age'].isin([-9, -8, -1, 999]).any()
    assert (sample_survey['trips_per_month'] == 0).any()
    assert np.isnan(sample_survey['lon']).any()

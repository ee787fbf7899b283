import pandas as pd
import pytest

from config.survey import CLUSTER_LABELS, CLUSTER_ORDER
from data_engineering.clean import (
    filter_eligible, drop_sentinels, recode_clusters, recode_codes, clean_survey,
)


def test_filter_eligible_requires_both_flags(respondents):
    out = filter_eligible(respondents)
    assert set(out['respondent_id']) == {'R1', 'R2', 'R3', 'R6', 'R7', 'R8'}


def test_filter_eligible_unknown_flag(respondents):
    with pytest.raises(ValueError):
        filter_eligible(respondents, ['not_a_flag'])


def test_drop_sentinels(respondents):
    out = drop_sentinels(respondents, 'age', [999, -9])
    assert 'R2' not in set(out['respondent_id'])
    assert 'R8' not in set(out['respondent_id'])
    assert len(out) == 6


def test_recode_is_total_over_mapped_ids():
    df = pd.DataFrame({'cluster_id': [5, 4, 3, 2, 1, 1]})
    out = recode_clusters(df)

    assert out['cluster'].tolist() == [CLUSTER_LABELS[i] for i in [5, 4, 3, 2, 1, 1]]
    assert out['cluster'].cat.ordered
    assert list(out['cluster'].cat.categories) == CLUSTER_ORDER


def test_recode_drops_unmapped_ids(respondents):
    out = recode_clusters(respondents)
    assert 9 not in out['cluster_id'].tolist()
    assert len(out) == len(respondents) - 1


def test_recode_drops_missing_ids():
    df = pd.DataFrame({'cluster_id': pd.array([1, None, 3], dtype='Int64')})
    out = recode_clusters(df)
    assert out['cluster'].tolist() == ['Disengaged', 'Moderate']


def test_recode_is_deterministic(respondents):
    first = recode_clusters(respondents)
    second = recode_clusters(respondents)
    pd.testing.assert_frame_equal(first, second)


def test_recode_does_not_mutate_input(respondents):
    before = respondents.copy()
    recode_clusters(respondents)
    pd.testing.assert_frame_equal(respondents, before)


def test_recode_label_outside_order():
    with pytest.raises(ValueError):
        recode_clusters(pd.DataFrame({'cluster_id': [1]}), mapping={1: 'Other'})


def test_recode_codes_keeps_rows():
    df = pd.DataFrame({'trust_answer': [1.0, 2.0, 3.0, None]})
    out = recode_codes(df, 'trust_answer', {1: 'Yes', 2: 'No'})

    assert len(out) == 4
    assert out['trust_answer'].tolist()[:2] == ['Yes', 'No']
    assert out['trust_answer'].isna().sum() == 2


def test_clean_survey_empty_result_is_not_an_error(respondents):
    ineligible = respondents.assign(eligible_age=0)
    out = clean_survey(ineligible)
    assert out.empty
    assert 'cluster' in out.columns


def test_clean_survey(respondents):
    out = clean_survey(respondents)
    # R4/R5 ineligible, R2/R8 sentinel ages, R6 unmapped cluster
    assert set(out['respondent_id']) == {'R1', 'R3', 'R7'}

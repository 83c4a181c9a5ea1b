import math

import pytest

from cafarank.config import CurationConfig
from cafarank.core.aggregate import Aggregate
from cafarank.core.errors import ContractViolation, EmptyInputError
from cafarank.core.filters import (
    drop_if,
    is_degenerate_smin,
    is_uninformative_auc,
    select_valid_term_auc,
    smin_exclusion_reason,
)
from cafarank.core.types import TermMetricRecord

NAN = float("nan")


def _auc(mid, scores):
    return TermMetricRecord.from_lists(mid, [f"GO:{i:07d}" for i in range(len(scores))], scores)


def _auc_terms(mid, terms, scores):
    return TermMetricRecord.from_lists(mid, terms, scores)


def test_drop_if_preserves_order():
    assert drop_if([5, 2, 8, 1, 4], lambda x: x % 2 == 0) == [5, 1]


def test_auc_nan_and_half_is_dropped():
    assert is_uninformative_auc(_auc("M001", [NAN, NAN, 0.5]))


def test_auc_single_informative_term_is_kept():
    assert not is_uninformative_auc(_auc("M001", [NAN, NAN, 0.51]))


def test_auc_baseline_marker_is_dropped():
    assert is_uninformative_auc(_auc("BN4S", [0.9, 0.8]))


def test_auc_without_terms_is_dropped():
    assert is_uninformative_auc(TermMetricRecord(model_id="M002"))


def test_select_valid_term_auc_keeps_model_whole():
    records = [
        _auc("M001", [NAN, 0.5, 0.7]),
        _auc("BB4S", [0.9]),
        _auc("M002", [0.5, 0.5]),
        _auc("M003", [0.2]),
    ]
    kept = select_valid_term_auc(records)
    assert [r.model_id for r in kept] == ["M001", "M003"]
    # no per-term trimming
    assert len(kept[0].score_per_term) == 3
    for r in kept:
        assert not r.model_id.startswith("B")
        assert any(not math.isnan(s) and s != 0.5 for s in r.score_per_term.values())


def test_select_valid_term_auc_marker_from_config():
    records = [_auc("XB1", [0.9]), _auc("B2", [0.9])]
    assert [r.model_id for r in select_valid_term_auc(records)] == ["XB1"]
    kept = select_valid_term_auc(records, CurationConfig(baseline_marker="X"))
    assert [r.model_id for r in kept] == ["B2"]


def test_select_valid_term_auc_no_discrimination_from_config():
    records = [_auc("M001", [NAN, 0.5]), _auc("M002", [0.6, NAN])]
    assert [r.model_id for r in select_valid_term_auc(records)] == ["M002"]
    kept = select_valid_term_auc(records, CurationConfig(no_discrimination_auc=0.6))
    assert [r.model_id for r in kept] == ["M001"]


def test_duplicate_term_ids_rejected():
    with pytest.raises(ContractViolation, match="duplicate term ids"):
        _auc_terms("M001", ["GO:1", "GO:1"], [0.7, NAN])


def test_select_valid_term_auc_rejects_empty():
    with pytest.raises(EmptyInputError):
        select_valid_term_auc([])


def _agg(mean=0.5, mean_covered=20.0, any_coverage=True):
    return Aggregate("m", mean, mean, mean, 0.5, mean_covered, any_coverage)


def test_smin_zero_coverage_excluded():
    assert is_degenerate_smin(_agg(any_coverage=False))
    assert "zero coverage" in smin_exclusion_reason(_agg(any_coverage=False))


def test_smin_covered_threshold():
    assert is_degenerate_smin(_agg(mean_covered=9.9))
    assert not is_degenerate_smin(_agg(mean_covered=10.0))
    assert not is_degenerate_smin(_agg(mean_covered=5.0), min_covered=5)


def test_smin_nan_mean_excluded():
    assert is_degenerate_smin(_agg(mean=NAN))


def test_smin_healthy_model_kept():
    assert smin_exclusion_reason(_agg()) is None

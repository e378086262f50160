"""Tests for reporting line depth, broken references and cycles."""

import logging

from orgaudit.config import AnalysisConfig
from orgaudit.errors import BrokenReferenceWarning
from orgaudit.hierarchy.models import DepthFinding
from orgaudit.hierarchy.org_model import OrgModel
from orgaudit.hierarchy.reporting_lines import DepthAnalyzer

from conftest import chain, make_record


def test_five_managers_exceeds_limit():
    """employee -> mgr1 -> mgr2 -> mgr3 -> mgr4 -> CEO is one too many."""
    model = OrgModel(chain(5))
    findings = DepthAnalyzer().analyze(model)
    assert findings == [DepthFinding(employee_id=6, manager_count=5, max_allowed=4, excess=1)]


def test_four_managers_is_allowed():
    model = OrgModel(chain(4))
    assert DepthAnalyzer().analyze(model) == []


def test_deeper_chain_reports_every_employee_over_limit():
    model = OrgModel(chain(7))
    findings = DepthAnalyzer().analyze(model)
    assert [(f.employee_id, f.manager_count, f.excess) for f in findings] == [
        (6, 5, 1),
        (7, 6, 2),
        (8, 7, 3),
    ]


def test_custom_max_depth():
    model = OrgModel(chain(3))
    findings = DepthAnalyzer(AnalysisConfig(max_depth=2)).analyze(model)
    assert findings == [DepthFinding(4, 3, 2, 1)]


def test_manager_count(sample_model):
    analyzer = DepthAnalyzer()
    assert analyzer.manager_count(sample_model, sample_model.root) == 0
    assert analyzer.manager_count(sample_model, sample_model.by_id[124]) == 1
    assert analyzer.manager_count(sample_model, sample_model.by_id[305]) == 3


def test_broken_reference_excluded_and_warned(caplog):
    """An unknown manager id is warned about and the employee skipped."""
    records = chain(5) + [make_record(50, manager_id=99)]
    model = OrgModel(records)
    analyzer = DepthAnalyzer()

    with caplog.at_level(logging.WARNING, logger="orgaudit.hierarchy.reporting_lines"):
        findings = analyzer.analyze(model)

    assert findings == [DepthFinding(6, 5, 4, 1)]
    assert analyzer.warnings == [BrokenReferenceWarning(50, 99, "missing")]
    assert "Manager with ID 99 not found for employee 50" in caplog.text
    assert analyzer.manager_count(model, model.by_id[50]) is None


def test_broken_reference_propagates_to_subordinates():
    model = OrgModel([
        make_record(1),
        make_record(2, manager_id=1),
        make_record(3, manager_id=99),
        make_record(4, manager_id=3),
    ])
    analyzer = DepthAnalyzer(AnalysisConfig(max_depth=0))
    findings = analyzer.analyze(model)

    # Employee 2 has one manager (the CEO), above the zero limit
    assert findings == [DepthFinding(2, 1, 0, 1)]
    assert [(w.employee_id, w.manager_id) for w in analyzer.warnings] == [(3, 99), (4, 99)]


def test_cycle_terminates_as_broken_reference():
    model = OrgModel([
        make_record(1),
        make_record(2, manager_id=3),
        make_record(3, manager_id=2),
        make_record(4, manager_id=1),
    ])
    analyzer = DepthAnalyzer()
    findings = analyzer.analyze(model)

    assert findings == []
    assert [(w.employee_id, w.reason) for w in analyzer.warnings] == [(2, "cycle"), (3, "cycle")]


def test_self_managed_employee_is_a_cycle():
    model = OrgModel([make_record(1), make_record(2, manager_id=2)])
    analyzer = DepthAnalyzer()
    assert analyzer.analyze(model) == []
    assert analyzer.warnings == [BrokenReferenceWarning(2, 2, "cycle")]


def test_warnings_reset_between_runs():
    model = OrgModel([make_record(1), make_record(2, manager_id=99)])
    analyzer = DepthAnalyzer()
    first = (analyzer.analyze(model), list(analyzer.warnings))
    second = (analyzer.analyze(model), list(analyzer.warnings))
    assert first == second
    assert len(analyzer.warnings) == 1


def test_analyze_is_idempotent():
    model = OrgModel(chain(8))
    analyzer = DepthAnalyzer()
    assert analyzer.analyze(model) == analyzer.analyze(model)


def test_root_only_org_has_no_findings():
    analyzer = DepthAnalyzer()
    assert analyzer.analyze(OrgModel([make_record(1)])) == []
    assert analyzer.warnings == []


def test_warning_to_dict():
    warning = BrokenReferenceWarning(5, 42)
    assert warning.to_dict() == {
        "employee_id": 5,
        "manager_id": 42,
        "reason": "missing",
        "message": "Manager with ID 42 not found for employee 5",
    }

"""Tests for core/transform.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from a11yreport.core.branding import resolve_white_label_config
from a11yreport.core.transform import (
    FALLBACK_IMPACT,
    MAX_PRIORITY_ISSUES,
    RISK_SUMMARIES,
    compute_top_priority_fixes,
    determine_maturity_level,
    determine_risk_level,
    determine_wcag_status,
    estimate_fix_time,
    estimate_total_fix_time,
    extract_hostname,
    transform_scan_to_report,
    transform_violation,
    transform_violations,
)
from a11yreport.models.branding import ReportStyle
from a11yreport.models.report import IssueBreakdown, MaturityLevel, RiskLevel, WcagStatus
from a11yreport.models.scan import ScanInput, Severity, Violation, parse_violations


class TestEstimates:
    def test_fix_time_minutes(self):
        assert estimate_fix_time(Severity.MINOR, 1) == "7 min"

    def test_fix_time_hours(self):
        assert estimate_fix_time(Severity.CRITICAL, 15) == "~1 hour"
        assert estimate_fix_time(Severity.CRITICAL, 60) == "~3 hours"

    @pytest.mark.parametrize(
        "breakdown,expected",
        [
            (IssueBreakdown(), "< 1 hour"),
            (IssueBreakdown(minor=2), "< 1 hour"),
            (IssueBreakdown(critical=2), "4 hours"),
            (IssueBreakdown(critical=2, serious=3, moderate=1, minor=1), "~2 days"),
            (IssueBreakdown(critical=4), "8 hours"),
            (IssueBreakdown(critical=5), "~2 days"),
        ],
    )
    def test_total_fix_time(self, breakdown, expected):
        assert estimate_total_fix_time(breakdown) == expected


class TestLevels:
    @pytest.mark.parametrize(
        "score,critical,expected",
        [
            (95, 0, RiskLevel.LOW),
            (95, 1, RiskLevel.MEDIUM),
            (75, 1, RiskLevel.MEDIUM),
            (75, 2, RiskLevel.HIGH),
            (50, 0, RiskLevel.HIGH),
            (49, 0, RiskLevel.CRITICAL),
        ],
    )
    def test_risk_level(self, score, critical, expected):
        assert determine_risk_level(score, IssueBreakdown(critical=critical)) == expected

    @pytest.mark.parametrize(
        "score,expected",
        [(100, MaturityLevel.PROACTIVE), (90, MaturityLevel.PROACTIVE), (75, MaturityLevel.STRUCTURED), (74, MaturityLevel.BASIC)],
    )
    def test_maturity_never_continuous(self, score, expected):
        assert determine_maturity_level(score) == expected

    @pytest.mark.parametrize("pct,expected", [(95, WcagStatus.PASS), (70, WcagStatus.PARTIAL), (69.9, WcagStatus.FAIL)])
    def test_wcag_status(self, pct, expected):
        assert determine_wcag_status(pct) == expected


class TestTransformViolation:
    def test_known_rule(self, sample_violations):
        v = Violation.model_validate(sample_violations[0])
        issue = transform_violation(v, "https://example.com/about")
        assert issue.title == "Insufficient Color Contrast"
        assert issue.severity == Severity.SERIOUS
        assert issue.affected_elements == 3
        assert issue.wcag_criteria == ["1.4.3"]
        assert [e.selector for e in issue.affected_element_details] == [
            "#color-contrast-1", "#color-contrast-2", "#color-contrast-3",
        ]
        assert {e.page_url for e in issue.affected_element_details} == {"https://example.com/about"}
        assert issue.help_url == "https://dequeuniversity.com/rules/axe/4.10/color-contrast"

    def test_unknown_rule_falls_back(self):
        v = Violation.model_validate({"id": "custom-rule", "help": "Custom help", "description": "Custom description"})
        issue = transform_violation(v)
        assert issue.title == "Custom help"
        assert issue.explanation == "Custom description"
        assert issue.impact == FALLBACK_IMPACT
        assert issue.severity == Severity.MINOR

    def test_unknown_rule_without_help_uses_id(self):
        issue = transform_violation(Violation(id="custom-rule"))
        assert issue.title == "custom-rule"

    def test_snippet_not_truncated(self):
        long_html = "<div>" + "x" * 5000 + "</div>"
        v = Violation.model_validate({"id": "region", "nodes": [{"target": ["div"], "html": long_html}]})
        assert transform_violation(v).affected_element_details[0].html == long_html


class TestTransformViolations:
    def test_sorted_by_severity(self, sample_violations):
        issues = transform_violations(parse_violations({"violations": sample_violations}))
        assert [i.id for i in issues] == ["image-alt", "color-contrast", "label", "link-name"]

    def test_stable_within_severity(self, violation_factory):
        raw = [violation_factory(f"rule-{i}", "serious", 1, []) for i in range(5)]
        issues = transform_violations(parse_violations({"violations": raw}))
        assert [i.id for i in issues] == [f"rule-{i}" for i in range(5)]

    def test_limit(self, violation_factory):
        raw = [violation_factory(f"rule-{i}", "minor", 1, []) for i in range(20)]
        violations = parse_violations({"violations": raw})
        assert len(transform_violations(violations)) == MAX_PRIORITY_ISSUES
        assert len(transform_violations(violations, limit=None)) == 20


class TestTopPriorityFixes:
    def test_ranked_by_weighted_impact(self, sample_violations):
        issues = transform_violations(parse_violations({"violations": sample_violations}))
        fixes = compute_top_priority_fixes(issues)
        assert [f.rule_id for f in fixes] == ["image-alt", "color-contrast", "label", "link-name"]
        assert [f.weighted_impact for f in fixes] == [20, 18, 3, 1]
        assert [f.rank for f in fixes] == [1, 2, 3, 4]

    def test_element_count_can_outrank_severity(self, violation_factory):
        raw = [
            violation_factory("image-alt", "critical", 1, []),
            violation_factory("link-name", "minor", 30, []),
        ]
        fixes = compute_top_priority_fixes(transform_violations(parse_violations({"violations": raw})))
        assert fixes[0].rule_id == "link-name"

    def test_at_most_five(self, violation_factory):
        raw = [violation_factory(f"rule-{i}", "moderate", i + 1, []) for i in range(8)]
        fixes = compute_top_priority_fixes(transform_violations(parse_violations({"violations": raw})))
        assert len(fixes) == 5
        assert fixes[0].rule_id == "rule-7"


class TestExtractHostname:
    def test_hostname(self):
        assert extract_hostname("https://www.example.com/a?b=c") == "www.example.com"

    def test_unparseable(self):
        assert extract_hostname("not a url") == "not a url"


class TestTransformScanToReport:
    def test_sample_scan(self, sample_scan):
        data = transform_scan_to_report(sample_scan)
        assert data.domain == "example.com"
        assert data.scan_id == "scan-test-001"
        assert data.score == 12
        assert data.health_score.grade == "F"
        assert data.issue_breakdown.total == 7
        assert data.risk_level == RiskLevel.CRITICAL
        assert data.risk_summary == RISK_SUMMARIES[RiskLevel.CRITICAL]
        assert data.maturity_level == MaturityLevel.BASIC
        assert data.compliance_percentage == 11
        assert data.wcag_aa_status == WcagStatus.FAIL
        assert data.eaa_ready is False
        assert data.page_title == "About Us"
        assert data.estimated_fix_time == "~2 days"
        assert len(data.findings) == 4
        assert data.total_affected_elements == 7
        assert len(data.top_priority_fixes) == 4

    def test_accepts_scan_input(self, sample_scan):
        data = transform_scan_to_report(ScanInput.model_validate(sample_scan))
        assert data.scan_id == "scan-test-001"

    def test_stored_compliance_used(self, sample_scan):
        sample_scan["wcagAACompliance"] = 96.5
        data = transform_scan_to_report(sample_scan)
        assert data.compliance_percentage == 97
        assert data.wcag_aa_status == WcagStatus.PASS

    def test_all_findings_kept_priority_capped(self, scan_factory, violation_factory):
        raw = [violation_factory(f"rule-{i}", "minor", 1, []) for i in range(22)]
        data = transform_scan_to_report(scan_factory(raw))
        assert len(data.findings) == 22
        assert len(data.priority_issues) == MAX_PRIORITY_ISSUES
        assert data.total_affected_elements == 22

    def test_clean_scan(self, clean_scan):
        data = transform_scan_to_report(clean_scan)
        assert data.score == 100
        assert data.health_score.grade == "A"
        assert data.findings == []
        assert data.top_priority_fixes == []
        assert data.eaa_ready is True
        assert data.risk_level == RiskLevel.LOW

    def test_fractional_stored_score(self, sample_scan):
        sample_scan["score"] = 72.5
        data = transform_scan_to_report(sample_scan)
        assert data.scan_id == "scan-test-001"
        assert data.score == 12

    def test_many_elements_preserved(self, scan_factory, violation_factory):
        raw = [violation_factory(f"rule-{i}", "serious", 20, ["wcag143"]) for i in range(50)]
        data = transform_scan_to_report(scan_factory(raw))
        assert len(data.findings) == 50
        assert sum(len(i.affected_element_details) for i in data.findings) == 1000
        for issue in data.findings:
            assert issue.affected_elements == len(issue.affected_element_details) == 20

    def test_garbage_raw_payload(self, scan_factory):
        scan = scan_factory([])
        scan["raw"] = "not json"
        assert transform_scan_to_report(scan).findings == []

    def test_white_label_applied(self, sample_scan):
        resolved = resolve_white_label_config({"company": "Acme", "report_style": "corporate", "branding": "false"})
        data = transform_scan_to_report(sample_scan, resolved)
        assert data.company_name == "Acme"
        assert data.report_style == ReportStyle.CORPORATE
        assert data.white_label_config.show_branding is False

    def test_scan_configuration(self, sample_scan):
        data = transform_scan_to_report(sample_scan, engine_version="4.9", pages_analyzed=3)
        assert data.scan_config.domain == "https://example.com/about"
        assert data.scan_config.engine_version == "4.9"
        assert data.scan_config.crawl_depth == "Multi-page"
        assert data.pages_scanned == 3

    def test_matrix_built_from_all_violations(self, sample_scan):
        data = transform_scan_to_report(sample_scan)
        failing = {r.criterion for r in data.wcag_matrix if r.related_findings}
        assert failing == {"1.4.3", "1.1.1", "3.3.2", "2.4.4"}

    def test_missing_required_field_raises(self, sample_scan):
        del sample_scan["id"]
        with pytest.raises(ValidationError):
            transform_scan_to_report(sample_scan)

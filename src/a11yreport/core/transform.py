"""Scan-to-report transformation.

Turns a scan record and its raw axe-core payload into the ``ReportData``
aggregate consumed by the HTML formatter. Every step here is pure and
fail-soft: missing or malformed violation data degrades to empty lists and
a clean score, never an exception.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional, Sequence, Union
from urllib.parse import urlsplit

from ..compliance.wcag import build_wcag_matrix
from ..models.branding import ResolvedWhiteLabel
from ..models.report import (
    AffectedElement,
    IssueBreakdown,
    MaturityLevel,
    ReportData,
    ReportIssue,
    RiskLevel,
    ScanConfiguration,
    TopPriorityFix,
    WcagStatus,
)
from ..models.scan import ScanInput, Severity, Violation, parse_violations
from .branding import resolve_white_label_config
from .rules import extract_wcag_criteria, get_rule_explanation
from .scoring import SEVERITY_WEIGHTS, compute_health_score, round_half_up

logger = logging.getLogger(__name__)

MAX_PRIORITY_ISSUES = 15
MAX_TOP_FIXES = 5

DEFAULT_ENGINE_NAME = "axe-core"
DEFAULT_ENGINE_VERSION = "4.10"
DEFAULT_USER_AGENT = "axe-core (headless browser)"
DEFAULT_VIEWPORT = "1280×720"
STANDARDS_TESTED = ["WCAG 2.2 Level A", "WCAG 2.2 Level AA"]

FALLBACK_EXPLANATION = "An accessibility issue was detected on this page."
FALLBACK_IMPACT = "Users with disabilities may encounter barriers when interacting with affected elements."
FALLBACK_RECOMMENDATION = "Review the affected elements and apply the appropriate WCAG fix."

FIX_BASE_MINUTES: dict[Severity, int] = {
    Severity.CRITICAL: 30,
    Severity.SERIOUS: 20,
    Severity.MODERATE: 15,
    Severity.MINOR: 5,
}
FIX_MINUTES_PER_ELEMENT = 2

# Remediation hours per issue, by severity
FIX_HOURS_PER_ISSUE: dict[Severity, float] = {
    Severity.CRITICAL: 2,
    Severity.SERIOUS: 1.5,
    Severity.MODERATE: 0.5,
    Severity.MINOR: 0.15,
}

RISK_SUMMARIES: dict[RiskLevel, str] = {
    RiskLevel.LOW: (
        "The assessed pages demonstrate strong accessibility practices with minimal barriers "
        "detected. Continued monitoring is recommended to maintain this standard."
    ),
    RiskLevel.MEDIUM: (
        "Several accessibility gaps were identified that may affect users relying on assistive "
        "technologies. Targeted remediation within 30 days is recommended to reduce compliance risk."
    ),
    RiskLevel.HIGH: (
        "Significant accessibility barriers were detected that are likely to prevent some users "
        "from completing key tasks. Prioritised remediation is strongly recommended to improve "
        "usability and reduce compliance exposure."
    ),
    RiskLevel.CRITICAL: (
        "Critical accessibility barriers were detected that may impact key user journeys and core "
        "functionality. Prompt remediation is strongly recommended to reduce compliance risk and "
        "improve the experience for all users."
    ),
}


def estimate_fix_time(severity: Severity, element_count: int) -> str:
    """Estimate remediation effort for one issue."""
    total_minutes = FIX_BASE_MINUTES[severity] + max(0, element_count) * FIX_MINUTES_PER_ELEMENT
    if total_minutes < 60:
        return f"{total_minutes} min"
    hours = round_half_up(total_minutes / 60)
    return "~1 hour" if hours == 1 else f"~{hours} hours"


def estimate_total_fix_time(breakdown: IssueBreakdown) -> str:
    """Estimate remediation effort for the whole scan."""
    total_hours = math.ceil(
        breakdown.critical * FIX_HOURS_PER_ISSUE[Severity.CRITICAL]
        + breakdown.serious * FIX_HOURS_PER_ISSUE[Severity.SERIOUS]
        + breakdown.moderate * FIX_HOURS_PER_ISSUE[Severity.MODERATE]
        + breakdown.minor * FIX_HOURS_PER_ISSUE[Severity.MINOR]
    )
    if total_hours <= 1:
        return "< 1 hour"
    if total_hours <= 8:
        return f"{total_hours} hours"
    days = math.ceil(total_hours / 8)
    return "~1 day" if days == 1 else f"~{days} days"


def determine_risk_level(score: int, breakdown: IssueBreakdown) -> RiskLevel:
    if score >= 90 and breakdown.critical == 0:
        return RiskLevel.LOW
    if score >= 70 and breakdown.critical <= 1:
        return RiskLevel.MEDIUM
    if score >= 50:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def determine_maturity_level(score: int) -> MaturityLevel:
    """Map a score to a maturity level. ``CONTINUOUS`` is never derived from a single scan."""
    if score >= 90:
        return MaturityLevel.PROACTIVE
    if score >= 75:
        return MaturityLevel.STRUCTURED
    return MaturityLevel.BASIC


def determine_wcag_status(compliance_percentage: float) -> WcagStatus:
    if compliance_percentage >= 95:
        return WcagStatus.PASS
    if compliance_percentage >= 70:
        return WcagStatus.PARTIAL
    return WcagStatus.FAIL


def determine_legal_risk(risk_level: RiskLevel) -> str:
    return RISK_SUMMARIES[risk_level]


def transform_violation(violation: Violation, page_url: str = "") -> ReportIssue:
    """Explain one violation and copy every affected node into the evidence list."""
    severity = violation.severity
    known = get_rule_explanation(violation.id)
    details = [
        AffectedElement(selector=node.selector, html=node.html, page_url=page_url)
        for node in violation.nodes
    ]
    element_count = len(details)

    return ReportIssue(
        id=violation.id,
        severity=severity,
        title=known.title if known else (violation.help or violation.id),
        explanation=known.explanation if known else (violation.description or FALLBACK_EXPLANATION),
        impact=known.impact if known else FALLBACK_IMPACT,
        recommendation=known.recommendation if known else FALLBACK_RECOMMENDATION,
        affected_elements=element_count,
        estimated_fix_time=estimate_fix_time(severity, element_count),
        wcag_criteria=extract_wcag_criteria(violation.tags),
        help_url=violation.help_url,
        affected_element_details=details,
    )


def transform_violations(
    violations: Sequence[Violation],
    page_url: str = "",
    limit: Optional[int] = MAX_PRIORITY_ISSUES,
) -> list[ReportIssue]:
    """Severity-sort violations and turn them into report issues.

    The sort is stable, so violations of equal severity keep scan order.
    ``limit=None`` keeps every violation.
    """
    ordered = sorted(violations, key=lambda v: v.severity.order)
    if limit is not None:
        ordered = ordered[:limit]
    return [transform_violation(v, page_url) for v in ordered]


def compute_top_priority_fixes(issues: Sequence[ReportIssue], limit: int = MAX_TOP_FIXES) -> list[TopPriorityFix]:
    """Rank issues by severity weight times affected elements."""
    scored = [(SEVERITY_WEIGHTS[issue.severity] * issue.affected_elements, issue) for issue in issues]
    scored.sort(key=lambda pair: pair[0], reverse=True)

    return [
        TopPriorityFix(
            rank=rank,
            rule_id=issue.id,
            title=issue.title,
            severity=issue.severity,
            affected_elements=issue.affected_elements,
            weighted_impact=impact,
        )
        for rank, (impact, issue) in enumerate(scored[:limit], start=1)
    ]


def build_scan_configuration(
    scan: ScanInput,
    pages_analyzed: int = 1,
    engine_name: str = DEFAULT_ENGINE_NAME,
    engine_version: str = DEFAULT_ENGINE_VERSION,
) -> ScanConfiguration:
    return ScanConfiguration(
        domain=scan.page_url,
        pages_analyzed=pages_analyzed,
        crawl_depth="Multi-page" if pages_analyzed > 1 else "Single page",
        scan_date_time=scan.created_at_iso,
        user_agent=DEFAULT_USER_AGENT,
        viewport=DEFAULT_VIEWPORT,
        standards_tested=list(STANDARDS_TESTED),
        engine_name=engine_name,
        engine_version=engine_version,
    )


def extract_hostname(url: str) -> str:
    """Hostname of ``url``, or ``url`` itself when it does not parse."""
    try:
        return urlsplit(url).hostname or url
    except ValueError:
        return url


def build_issue_breakdown(scan: ScanInput) -> IssueBreakdown:
    return IssueBreakdown(
        total=scan.issues or 0,
        critical=scan.impact_critical or 0,
        serious=scan.impact_serious or 0,
        moderate=scan.impact_moderate or 0,
        minor=scan.impact_minor or 0,
    )


def transform_scan_to_report(
    scan: Union[ScanInput, Mapping[str, Any]],
    resolved: Optional[ResolvedWhiteLabel] = None,
    *,
    engine_name: str = DEFAULT_ENGINE_NAME,
    engine_version: str = DEFAULT_ENGINE_VERSION,
    pages_analyzed: int = 1,
) -> ReportData:
    """Build the report aggregate for one scan.

    ``scan`` may be a ``ScanInput`` or a mapping in the persistence layer's
    shape; a mapping that lacks required fields raises
    ``pydantic.ValidationError``. Without ``resolved``, the default
    white-label configuration is used.
    """
    if not isinstance(scan, ScanInput):
        scan = ScanInput.model_validate(scan)
    if resolved is None:
        resolved = resolve_white_label_config({})

    breakdown = build_issue_breakdown(scan)
    health_score = compute_health_score(breakdown, pages_analyzed)
    score = health_score.value

    risk_level = determine_risk_level(score, breakdown)
    compliance_percentage = (
        round_half_up(scan.wcag_aa_compliance)
        if scan.wcag_aa_compliance is not None
        else round_half_up(score * 0.95)
    )
    aaa_percentage = (
        scan.wcag_aaa_compliance
        if scan.wcag_aaa_compliance is not None
        else round_half_up(score * 0.7)
    )

    page_url = scan.page_url
    violations = parse_violations(scan.raw)
    findings = transform_violations(violations, page_url=page_url, limit=None)
    priority_issues = findings[:MAX_PRIORITY_ISSUES]
    risk_text = determine_legal_risk(risk_level)

    white_label = resolved.white_label_config
    report = ReportData(
        company_name=white_label.company_name_override,
        domain=extract_hostname(page_url),
        scan_date=scan.created_at_iso,
        scan_id=scan.id,
        score=score,
        compliance_percentage=compliance_percentage,
        wcag_aa_status=determine_wcag_status(compliance_percentage),
        wcag_aaa_status=determine_wcag_status(aaa_percentage),
        eaa_ready=score >= 80 and breakdown.critical == 0,
        risk_level=risk_level,
        maturity_level=determine_maturity_level(score),
        issue_breakdown=breakdown,
        findings=findings,
        priority_issues=priority_issues,
        legal_risk=risk_text,
        risk_summary=risk_text,
        estimated_fix_time=estimate_total_fix_time(breakdown),
        engine_name=engine_name,
        engine_version=engine_version,
        theme_config=resolved.theme_config,
        white_label_config=white_label,
        cta_config=resolved.cta_config,
        report_style=resolved.report_style,
        page_title=scan.page.title if scan.page else None,
        pages_scanned=pages_analyzed,
        favicon_url=resolved.favicon_url,
        health_score=health_score,
        wcag_matrix=build_wcag_matrix(violations),
        scan_config=build_scan_configuration(scan, pages_analyzed, engine_name, engine_version),
        top_priority_fixes=compute_top_priority_fixes(priority_issues),
        scan_timestamp=scan.created_at_iso,
    )

    logger.info(
        "Report assembled for scan %s: %d findings, %d elements, score %d (%s)",
        scan.id, len(findings), report.total_affected_elements, score, health_score.grade,
    )
    return report

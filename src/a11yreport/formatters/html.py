"""HTML report formatter.

``render_report_html`` turns a ``ReportData`` into one standalone HTML
document with inline CSS and SVG. It is a pure function: no I/O, no clock,
no randomness, so the same input always yields byte-identical output.

Every user-controlled string goes through ``escape_html`` before it is
interpolated. Colours and image URLs are re-validated so a hand-built
``ReportData`` cannot inject into the style sheet or point the document at
a host outside the image allow-list.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..compliance.wcag import MATRIX_PAGE_SIZE, paginate, select_matrix_rows, summarize_matrix
from ..core.branding import validate_hex, validate_image_url, validate_link_url
from ..core.scoring import round_half_up
from ..models.branding import DEFAULT_BRAND_NAME, DEFAULT_PRIMARY_COLOR, CTAConfig, ReportStyle, ReportThemeConfig
from ..models.report import (
    MatrixStatus,
    MaturityLevel,
    ReportData,
    ReportIssue,
    RiskLevel,
    WcagMatrixRow,
    WcagStatus,
)
from ..models.scan import Severity
from ..utils.sanitize import anchor_id, escape_html
from .charts import (
    BAD_COLOR,
    GOOD_COLOR,
    SEVERITY_COLORS,
    WARN_COLOR,
    donut_chart_svg,
    progress_bar_svg,
    score_color,
    score_ring_svg,
)
from .css import build_css

REPORT_VERSION = "v2"
REPORT_VERSION_LABEL = "Report v1.0"

CARDS_PER_PAGE = 4
TABLE_ISSUES_PER_PAGE = 8
EVIDENCE_CHUNK_SIZE = 50
TOC_MIN_FINDINGS = 20
TOC_MIN_ELEMENTS = 200

RISK_LABELS: dict[RiskLevel, str] = {
    RiskLevel.LOW: "Low",
    RiskLevel.MEDIUM: "Medium",
    RiskLevel.HIGH: "High",
    RiskLevel.CRITICAL: "Critical",
}

WCAG_STATUS_LABELS: dict[WcagStatus, str] = {
    WcagStatus.PASS: "Compliant",
    WcagStatus.PARTIAL: "Partial",
    WcagStatus.FAIL: "Non-compliant",
}

WCAG_STATUS_COLORS: dict[WcagStatus, str] = {
    WcagStatus.PASS: GOOD_COLOR,
    WcagStatus.PARTIAL: WARN_COLOR,
    WcagStatus.FAIL: BAD_COLOR,
}

MATRIX_STATUS_CLASSES: dict[MatrixStatus, str] = {
    MatrixStatus.PASS: "status-pass",
    MatrixStatus.FAIL: "status-fail",
    MatrixStatus.NEEDS_MANUAL_REVIEW: "status-manual",
    MatrixStatus.NOT_TESTED: "status-not-tested",
}

MATRIX_LEGEND: tuple[tuple[MatrixStatus, str], ...] = (
    (MatrixStatus.PASS, "No violations detected"),
    (MatrixStatus.FAIL, "Automated violations detected"),
    (MatrixStatus.NEEDS_MANUAL_REVIEW, "Cannot be fully verified automatically"),
    (MatrixStatus.NOT_TESTED, "Outside scan scope"),
)

MATURITY_STEPS: tuple[MaturityLevel, ...] = (
    MaturityLevel.BASIC,
    MaturityLevel.STRUCTURED,
    MaturityLevel.PROACTIVE,
    MaturityLevel.CONTINUOUS,
)

SEVERITY_LABELS: dict[Severity, str] = {s: s.value.title() for s in Severity}

HEALTH_SCORE_MICROCOPY = (
    "The Health Score is derived from the number and severity of issues detected, "
    "with critical and serious barriers weighing most heavily."
)
COVERAGE_NOTE = (
    "Automated testing does not cover all WCAG requirements. Criteria marked for manual "
    "review, and any criteria outside the scan scope, should be verified by an accessibility specialist."
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def format_date(value: str) -> str:
    """Format an ISO timestamp as ``20 February 2025``; unparseable input is returned as-is."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return value
    return f"{parsed.day} {parsed.strftime('%B %Y')}"


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def initials(name: str) -> str:
    """Up to two initials for the monogram logo fallback."""
    words = [w for w in name.replace(".", " ").replace("-", " ").split() if w[:1].isalnum()]
    letters = "".join(w[0] for w in words[:2]).upper()
    return letters or "A"


def finding_anchors(findings: Sequence[ReportIssue]) -> list[str]:
    """Unique ``finding-<rule>`` ids, one per finding, in finding order."""
    seen: dict[str, int] = {}
    anchors: list[str] = []
    for issue in findings:
        base = anchor_id(issue.id, prefix="finding-")
        count = seen.get(base, 0) + 1
        seen[base] = count
        anchors.append(base if count == 1 else f"{base}-{count}")
    return anchors


def footer_brand(data: ReportData) -> str:
    if data.report_branding and data.report_branding.company_name:
        return data.report_branding.company_name
    if not data.white_label_config.show_branding and data.company_name:
        return data.company_name
    return DEFAULT_BRAND_NAME


def resolve_primary(data: ReportData) -> str:
    override = data.report_branding.primary_color if data.report_branding else None
    return (
        validate_hex(override)
        or validate_hex(data.white_label_config.primary_color)
        or validate_hex(data.theme_config.primary_color)
        or DEFAULT_PRIMARY_COLOR
    )


def safe_theme(theme: ReportThemeConfig) -> ReportThemeConfig:
    defaults = ReportThemeConfig()
    return ReportThemeConfig(
        primary_color=validate_hex(theme.primary_color) or defaults.primary_color,
        secondary_color=validate_hex(theme.secondary_color) or defaults.secondary_color,
        accent_color=validate_hex(theme.accent_color) or defaults.accent_color,
        background_color=validate_hex(theme.background_color) or defaults.background_color,
        dark_color=validate_hex(theme.dark_color) or defaults.dark_color,
    )


def severity_badge(severity: Severity) -> str:
    return f'<span class="severity-badge sev-{severity.value}">{SEVERITY_LABELS[severity]}</span>'


def section_title(title: str, continued: bool = False) -> str:
    suffix = " (continued)" if continued else ""
    return f'<h2 class="section-title">{title}{suffix}</h2>'


# ---------------------------------------------------------------------------
# Page sections
# ---------------------------------------------------------------------------

def render_running_elements(data: ReportData) -> str:
    return (
        '<div class="running-header">'
        f'<span class="rh-left">{escape_html(data.domain)}</span>'
        f'<span class="rh-right">{escape_html(format_date(data.scan_date))}</span>'
        "</div>\n"
        '<div class="running-footer">'
        f'<span class="rf-left">Generated by {escape_html(footer_brand(data))}</span>'
        f'<span class="rf-center">{REPORT_VERSION_LABEL}</span>'
        f'<span class="rf-right">Scan {escape_html(data.scan_id)}</span>'
        "</div>"
    )


def safe_image_src(url: Optional[str]) -> str:
    """Allow-listed URL or inline data image, else empty."""
    if url and url.startswith("data:image/"):
        return url
    return validate_image_url(url)


def render_logo(data: ReportData) -> str:
    logo_url = safe_image_src(data.white_label_config.logo_url)
    if data.report_branding:
        logo_url = safe_image_src(data.report_branding.logo_url) or logo_url
    label = data.company_name or data.domain
    if logo_url:
        return f'<img src="{escape_html(logo_url)}" alt="{escape_html(label)}" class="cover-logo"/>'
    return f'<div class="cover-monogram" aria-hidden="true">{escape_html(initials(label))}</div>'


def render_cover(data: ReportData) -> str:
    hs = data.health_score
    bd = data.issue_breakdown
    eaa_class = "badge-ready" if data.eaa_ready else "badge-not-ready"
    eaa_text = "Ready" if data.eaa_ready else "Remediation Required"
    info_line = (
        f"{plural(bd.total, 'issue')} detected across {plural(data.pages_scanned, 'page')}"
    )

    if data.report_style == ReportStyle.CORPORATE:
        color = score_color(hs.value)
        severity_items = []
        for severity, count in (
            (Severity.CRITICAL, bd.critical),
            (Severity.SERIOUS, bd.serious),
            (Severity.MODERATE, bd.moderate),
            (Severity.MINOR, bd.minor),
        ):
            severity_items.append(
                f'<span class="csb-item"><span class="status-dot" style="background:{SEVERITY_COLORS[severity]}"></span>'
                f'<span class="csb-count">{count}</span> <span class="csb-name">{SEVERITY_LABELS[severity]}</span></span>'
            )
        score_block = (
            '<div class="cover-score-card-corp">'
            '<div class="csc-label">Health Score</div>'
            f'<div class="csc-score">{hs.value}/100</div>'
            f'<div class="csc-grade-label">Grade {escape_html(hs.grade)} &middot; {escape_html(hs.label)}</div>'
            f'<div class="csc-bar-track"><div class="csc-bar-fill" style="width:{hs.value}%;background:{color}"></div></div>'
            "</div>\n"
            '<div class="cover-severity-bar">'
            + '<span class="csb-sep">|</span>'.join(severity_items)
            + "</div>"
        )
    else:
        score_block = (
            '<div class="cover-score-card">'
            '<div class="csc-label">Health Score</div>'
            f"{score_ring_svg(hs.value, hs.grade, 220)}"
            f'<div class="csc-grade-label">{hs.value}/100 &middot; {escape_html(hs.label)}</div>'
            "</div>"
        )

    powered = '<p class="cover-powered">Powered by VexNexa</p>' if data.white_label_config.show_branding else ""
    company = (
        f'<p class="cover-company">Prepared by {escape_html(data.company_name)}</p>' if data.company_name else ""
    )
    page_title = (
        f'<p class="cover-page-title">{escape_html(data.page_title)}</p>' if data.page_title else ""
    )

    return f"""<section class="page cover-page" id="cover">
  <div class="cover-top">{render_logo(data)}</div>
  <div class="cover-center">
    <div class="cover-audit-label">Automated Accessibility Audit</div>
    <h1 class="cover-title">Accessibility<br/>Compliance Report</h1>
    <div class="cover-domain">
      <span class="cover-domain-label">Scanned Domain</span>
      <span class="cover-domain-value">{escape_html(data.domain)}</span>
    </div>
    {page_title}
    <p class="cover-info-line">{info_line}</p>
    {score_block}
    <div class="cover-badges">
      <span class="badge badge-compliance">{escape_html(data.compliance_level)}</span>
      <span class="badge {eaa_class}">EAA 2025 {eaa_text}</span>
      <span class="badge risk-{data.risk_level.value.lower()}">Risk: {RISK_LABELS[data.risk_level]}</span>
    </div>
  </div>
  <div class="cover-bottom">
    {company}
    <p class="cover-date">Report generated {escape_html(format_date(data.scan_date))}</p>
    {powered}
  </div>
</section>"""


def render_toc(data: ReportData, anchors: Sequence[str]) -> str:
    entries = [
        ("exec-summary", "Executive Summary"),
        ("visual-breakdown", "Visual Breakdown"),
        ("wcag-matrix", "WCAG 2.2 Compliance Matrix"),
        ("priority-issues", "Priority Issues"),
        ("findings-index", "Findings Index"),
        ("scan-config", "Scan Configuration"),
        ("compliance-legal", "Compliance &amp; Legal"),
        ("appendix", "Evidence Appendix"),
    ]
    items: list[str] = []
    for target, label in entries:
        items.append(f'<li class="toc-level-2"><a href="#{target}">{label}</a></li>')
        if target == "appendix":
            for issue, anchor in zip(data.findings, anchors):
                items.append(
                    f'<li class="toc-level-3"><a href="#{anchor}">{escape_html(issue.title)}</a> '
                    f"({plural(issue.affected_elements, 'element')})</li>"
                )
    return f"""<section class="page toc-page" id="toc">
  {section_title("Table of Contents")}
  <nav class="toc-nav">
    <ol>
      {"".join(items)}
    </ol>
  </nav>
</section>"""


def render_top_fixes(data: ReportData, anchor_by_rule: dict[str, str]) -> str:
    if not data.top_priority_fixes:
        return ""
    rows = []
    for fix in data.top_priority_fixes:
        anchor = anchor_by_rule.get(fix.rule_id)
        title = escape_html(fix.title)
        if anchor:
            title = f'<a href="#{anchor}">{title}</a>'
        rows.append(
            f'<tr><td class="num">{fix.rank}</td><td>{title}</td><td>{severity_badge(fix.severity)}</td>'
            f'<td class="num">{fix.affected_elements}</td><td class="num">{fix.weighted_impact}</td></tr>'
        )
    return f"""<h3 class="subsection-title">Top Priority Fixes</h3>
  <table class="tpf-table">
    <thead><tr><th>#</th><th>Issue</th><th>Severity</th><th>Elements</th><th>Impact</th></tr></thead>
    <tbody>{"".join(rows)}</tbody>
  </table>"""


def render_executive_summary(data: ReportData, anchor_by_rule: dict[str, str]) -> str:
    hs = data.health_score
    bd = data.issue_breakdown
    risk_label = RISK_LABELS[data.risk_level]

    trend = ""
    if data.health_score_previous is not None:
        delta = hs.value - data.health_score_previous
        sign = "+" if delta > 0 else ""
        trend = f'<div class="ehb-trend">{sign}{delta} since previous scan ({data.health_score_previous}/100)</div>'

    if bd.critical > 0:
        critical_text = (
            f'There {"is" if bd.critical == 1 else "are"} <strong class="risk-critical">'
            f"{plural(bd.critical, 'critical issue')}</strong> requiring immediate attention."
        )
    else:
        critical_text = "No critical issues were detected."

    metrics = [
        ("Total Issues", str(bd.total), "#6B7280"),
        ("Critical", str(bd.critical), SEVERITY_COLORS[Severity.CRITICAL]),
        ("Serious", str(bd.serious), SEVERITY_COLORS[Severity.SERIOUS]),
        ("Moderate", str(bd.moderate), SEVERITY_COLORS[Severity.MODERATE]),
        ("Minor", str(bd.minor), SEVERITY_COLORS[Severity.MINOR]),
        ("Health Score", f"{hs.value}/100", score_color(hs.value)),
        ("WCAG Checks Passed", f"{data.compliance_percentage}%", GOOD_COLOR),
        ("Est. Fix Time", escape_html(data.estimated_fix_time), "#7C3AED"),
    ]
    metric_cards = "".join(
        f'<div class="metric-card"><div class="metric-value" style="color:{color}">{value}</div>'
        f'<div class="metric-label">{label}</div></div>'
        for label, value, color in metrics
    )

    return f"""<section class="page" id="exec-summary">
  {section_title("Executive Summary")}
  <div class="exec-health-row">
    <div class="exec-health-badge">
      <div class="ehb-title">Health Score</div>
      <div class="ehb-score" style="color:{score_color(hs.value)}">{hs.value}</div>
      <div class="ehb-grade">{hs.value}/100 &middot; Grade {escape_html(hs.grade)}</div>
      <div class="ehb-label">{escape_html(hs.label)}</div>
      {trend}
    </div>
    <div class="exec-health-copy">
      <p>The scanned pages on <strong>{escape_html(data.domain)}</strong> achieved a Health Score of
      <strong>{hs.value}/100</strong> (Grade {escape_html(hs.grade)}). {critical_text}</p>
      <p class="microcopy">{HEALTH_SCORE_MICROCOPY}</p>
    </div>
  </div>
  <div class="exec-cards">
    <div class="exec-card">
      <h3>Accessibility Risk Summary</h3>
      <p class="risk-label risk-{data.risk_level.value.lower()}">{risk_label} Risk</p>
      <p>{escape_html(data.risk_summary)}</p>
    </div>
    <div class="exec-card">
      <h3>Estimated Remediation</h3>
      <p>Based on {plural(bd.total, 'identified issue')}, the estimated developer effort is
      <strong>{escape_html(data.estimated_fix_time)}</strong>.</p>
    </div>
    <div class="exec-card">
      <h3>Accessibility Maturity</h3>
      <p>Current maturity level: <strong>{data.maturity_level.value}</strong>.</p>
    </div>
  </div>
  {render_top_fixes(data, anchor_by_rule)}
  <h3 class="subsection-title">Key Metrics</h3>
  <div class="metrics-grid">{metric_cards}</div>
</section>"""


def render_visual_breakdown(data: ReportData, primary: str) -> str:
    aa_color = WCAG_STATUS_COLORS[data.wcag_aa_status]
    aaa_color = WCAG_STATUS_COLORS[data.wcag_aaa_status]
    aaa_pct = round_half_up(data.compliance_percentage * 0.7)
    eaa_color = GOOD_COLOR if data.eaa_ready else WARN_COLOR

    current = MATURITY_STEPS.index(data.maturity_level)
    steps = []
    for index, level in enumerate(MATURITY_STEPS):
        classes = ["maturity-step"]
        if index <= current:
            classes.append("reached")
        if index == current:
            classes.append("active")
        steps.append(
            f'<div class="{" ".join(classes)}"><div class="maturity-dot"></div><span>{level.value}</span></div>'
        )

    return f"""<section class="page" id="visual-breakdown">
  {section_title("Visual Breakdown")}
  <div class="breakdown-grid">
    <div class="breakdown-card">
      <h3>Severity Distribution</h3>
      <div class="chart-center">{donut_chart_svg(data.issue_breakdown)}</div>
    </div>
    <div class="breakdown-card">
      <h3>WCAG Checks Passed</h3>
      <div class="progress-stack">
        {progress_bar_svg("WCAG AA", data.compliance_percentage, aa_color)}
        {progress_bar_svg("WCAG AAA", aaa_pct, aaa_color)}
        {progress_bar_svg("Score", data.score, primary)}
      </div>
    </div>
  </div>
  <div class="breakdown-grid mt-24">
    <div class="breakdown-card">
      <h3>WCAG Level Status</h3>
      <table class="status-table">
        <tr><td>WCAG 2.2 Level AA</td><td><span class="status-dot" style="background:{aa_color}"></span>{WCAG_STATUS_LABELS[data.wcag_aa_status]}</td></tr>
        <tr><td>WCAG 2.2 Level AAA</td><td><span class="status-dot" style="background:{aaa_color}"></span>{WCAG_STATUS_LABELS[data.wcag_aaa_status]}</td></tr>
        <tr><td>EAA 2025 Readiness</td><td><span class="status-dot" style="background:{eaa_color}"></span>{"Ready" if data.eaa_ready else "Remediation Required"}</td></tr>
      </table>
    </div>
    <div class="breakdown-card">
      <h3>Accessibility Maturity</h3>
      <div class="maturity-indicator">{"".join(steps)}</div>
    </div>
  </div>
</section>"""


def render_matrix_row(row: WcagMatrixRow) -> str:
    return (
        f"<tr><td>{escape_html(row.label)}</td><td>{escape_html(row.level)}</td>"
        f'<td><span class="status-pill {MATRIX_STATUS_CLASSES[row.status]}">{row.status.value}</span></td>'
        f'<td class="num">{row.related_findings}</td></tr>'
    )


def render_wcag_matrix(data: ReportData) -> str:
    shown = select_matrix_rows(data.wcag_matrix)
    pages = paginate(shown, MATRIX_PAGE_SIZE) or [[]]
    summary = summarize_matrix(data.wcag_matrix)

    legend = "".join(
        f'<span class="legend-item"><span class="status-pill {MATRIX_STATUS_CLASSES[status]}">{status.value}</span> {text}</span>'
        for status, text in MATRIX_LEGEND
    )
    summary_text = ", ".join(f"{summary[status]} {status.value}" for status, _ in MATRIX_LEGEND)
    hidden = len(data.wcag_matrix) - len(shown)
    sample_note = (
        f" This table lists every failing and manual-review criterion plus a sample of the rest;"
        f" {hidden} further {'criterion is' if hidden == 1 else 'criteria are'} counted in the totals above."
        if hidden > 0 else ""
    )

    sections: list[str] = []
    for index, rows in enumerate(pages):
        intro = ""
        if index == 0:
            intro = f"""<div class="matrix-legend">{legend}</div>
  <p class="coverage-note">{COVERAGE_NOTE}</p>
  <p class="matrix-summary">{len(data.wcag_matrix)} WCAG 2.2 criteria tracked: {summary_text}.{sample_note}</p>"""
        anchor = ' id="wcag-matrix"' if index == 0 else ""
        sections.append(f"""<section class="page"{anchor}>
  {section_title("WCAG 2.2 Compliance Matrix", continued=index > 0)}
  {intro}
  <table class="wcag-matrix-table">
    <thead><tr><th>Success Criterion</th><th>Level</th><th>Status</th><th>Findings</th></tr></thead>
    <tbody>{"".join(render_matrix_row(r) for r in rows)}</tbody>
  </table>
</section>""")
    return "\n".join(sections)


def render_issue_card(issue: ReportIssue, number: int, anchor: str) -> str:
    wcag = f"<span>WCAG {escape_html(', '.join(issue.wcag_criteria))}</span>" if issue.wcag_criteria else ""
    return f"""<div class="issue-card">
  <div class="issue-header">
    <span class="issue-num">#{number}</span>
    {severity_badge(issue.severity)}
    <h4 class="issue-title">{escape_html(issue.title)}</h4>
  </div>
  <div class="issue-body">
    <div class="issue-row"><strong>What's happening</strong><p>{escape_html(issue.explanation)}</p></div>
    <div class="issue-row"><strong>User impact</strong><p>{escape_html(issue.impact)}</p></div>
    <div class="issue-row"><strong>Recommended fix</strong><p>{escape_html(issue.recommendation)}</p></div>
    <div class="issue-meta">
      <span>{plural(issue.affected_elements, "element")} affected</span>
      <span>Est. {escape_html(issue.estimated_fix_time)}</span>
      {wcag}
      <span><a href="#{anchor}">View evidence</a></span>
    </div>
  </div>
</div>"""


def render_issue_table(issues: Sequence[ReportIssue], start: int, anchors: Sequence[str]) -> str:
    rows = []
    for offset, (issue, anchor) in enumerate(zip(issues, anchors)):
        rows.append(
            f'<tr><td class="num">{start + offset}</td>'
            f'<td><a href="#{anchor}">{escape_html(issue.title)}</a>'
            f'<div class="issue-rec">{escape_html(issue.recommendation)}</div></td>'
            f"<td>{severity_badge(issue.severity)}</td>"
            f'<td class="num">{issue.affected_elements}</td>'
            f"<td>{escape_html(issue.estimated_fix_time)}</td>"
            f"<td>{escape_html(', '.join(issue.wcag_criteria))}</td></tr>"
        )
    return (
        '<table class="issues-table"><thead><tr><th>#</th><th>Issue &amp; Recommendation</th><th>Severity</th>'
        "<th>Elements</th><th>Est. Fix</th><th>WCAG</th></tr></thead>"
        f'<tbody>{"".join(rows)}</tbody></table>'
    )


def render_priority_issues(data: ReportData, anchors: Sequence[str]) -> str:
    issues = data.priority_issues
    if not issues:
        return f"""<section class="page" id="priority-issues">
  {section_title("Priority Issues")}
  <div class="empty-state"><p>No accessibility issues were detected. Excellent work!</p></div>
</section>"""

    corporate = data.report_style == ReportStyle.CORPORATE
    per_page = TABLE_ISSUES_PER_PAGE if corporate else CARDS_PER_PAGE
    sections: list[str] = []
    for page_index, start in enumerate(range(0, len(issues), per_page)):
        page_issues = issues[start:start + per_page]
        page_anchors = anchors[start:start + per_page]
        if corporate:
            body = render_issue_table(page_issues, start + 1, page_anchors)
        else:
            body = '<div class="issues-list">' + "".join(
                render_issue_card(issue, start + i + 1, anchor)
                for i, (issue, anchor) in enumerate(zip(page_issues, page_anchors))
            ) + "</div>"
        anchor_attr = ' id="priority-issues"' if page_index == 0 else ""
        sections.append(f"""<section class="page"{anchor_attr}>
  {section_title("Priority Issues", continued=page_index > 0)}
  {body}
</section>""")
    return "\n".join(sections)


def render_findings_index(data: ReportData, anchors: Sequence[str]) -> str:
    if not data.findings:
        body = '<div class="empty-state"><p>No accessibility issues were detected.</p></div>'
    else:
        rows = "".join(
            f'<tr><td class="num">{n}</td><td><a href="#{anchor}">{escape_html(issue.title)}</a>'
            f"<br/><code>{escape_html(issue.id)}</code></td>"
            f"<td>{severity_badge(issue.severity)}</td>"
            f'<td class="num">{issue.affected_elements}</td>'
            f"<td>{escape_html(', '.join(issue.wcag_criteria))}</td></tr>"
            for n, (issue, anchor) in enumerate(zip(data.findings, anchors), start=1)
        )
        body = (
            '<table class="data-table findings-index-table"><thead><tr><th>#</th><th>Finding</th>'
            "<th>Severity</th><th>Elements</th><th>WCAG</th></tr></thead>"
            f"<tbody>{rows}</tbody></table>"
        )
    return f"""<section class="page" id="findings-index">
  {section_title("Findings Index")}
  <p class="matrix-summary">{plural(len(data.findings), "finding")} affecting {plural(data.total_affected_elements, "element")}.</p>
  {body}
</section>"""


def render_scan_config(data: ReportData) -> str:
    sc = data.scan_config
    rows = [
        ("Domain", escape_html(sc.domain)),
        ("Pages Analysed", str(sc.pages_analyzed)),
        ("Crawl Depth", escape_html(sc.crawl_depth)),
        ("Scan Date &amp; Time", escape_html(sc.scan_date_time)),
        ("User Agent", escape_html(sc.user_agent)),
        ("Viewport", escape_html(sc.viewport)),
        ("Standards Tested", escape_html(", ".join(sc.standards_tested))),
        ("Engine", f"{escape_html(sc.engine_name)} v{escape_html(sc.engine_version)}"),
    ]
    body = "".join(f"<tr><td>{label}</td><td>{value}</td></tr>" for label, value in rows)
    return f"""<section class="page" id="scan-config">
  {section_title("Scan Configuration")}
  <table class="audit-table scan-config-table">{body}</table>
</section>"""


def render_compliance_legal(data: ReportData) -> str:
    eaa_text = (
        "The scanned pages meet the baseline automated checks for EAA readiness."
        if data.eaa_ready
        else "The scanned pages require remediation to meet EAA requirements."
    )
    eaa_class = "risk-low" if data.eaa_ready else "risk-medium"
    return f"""<section class="page" id="compliance-legal">
  {section_title("Compliance &amp; Legal")}
  <div class="legal-grid">
    <div class="legal-card">
      <h3>European Accessibility Act (EAA) 2025</h3>
      <p>The European Accessibility Act requires many digital products and services to be accessible from 28 June 2025.
      Organisations that fall short may face enforcement action in EU member states.</p>
      <p><strong>Status:</strong> <span class="risk-label {eaa_class}">{eaa_text}</span></p>
    </div>
    <div class="legal-card">
      <h3>Continuous Monitoring Recommendation</h3>
      <p>Content changes, new features and third-party integrations can introduce new barriers. We recommend:</p>
      <ul>
        <li>Automated weekly scans to catch regressions</li>
        <li>A manual audit every quarter for complex interactions</li>
        <li>Developer training on WCAG fundamentals</li>
        <li>Accessibility checks as part of the CI/CD pipeline</li>
      </ul>
    </div>
    <div class="legal-card">
      <h3>Audit Traceability</h3>
      <table class="audit-table">
        <tr><td>Scan ID</td><td><code>{escape_html(data.scan_id)}</code></td></tr>
        <tr><td>Scan Date</td><td>{escape_html(format_date(data.scan_date))}</td></tr>
        <tr><td>Engine</td><td>{escape_html(data.engine_name)} v{escape_html(data.engine_version)}</td></tr>
        <tr><td>Standard</td><td>{escape_html(data.compliance_level)}</td></tr>
        <tr><td>Domain</td><td>{escape_html(data.domain)}</td></tr>
        <tr><td>Pages Scanned</td><td>{data.pages_scanned}</td></tr>
      </table>
    </div>
  </div>
</section>"""


def render_evidence_table(issue: ReportIssue) -> str:
    """Evidence tables for one finding, split into chunks with continuous row numbers."""
    details = issue.affected_element_details
    if not details:
        return '<p class="evidence-meta">No element details were recorded for this finding.</p>'

    chunks = [details[i:i + EVIDENCE_CHUNK_SIZE] for i in range(0, len(details), EVIDENCE_CHUNK_SIZE)]
    parts: list[str] = []
    number = 0
    for index, chunk in enumerate(chunks, start=1):
        if len(chunks) > 1:
            parts.append(f'<p class="chunk-label">Affected elements ({index}/{len(chunks)})</p>')
        rows = []
        for element in chunk:
            number += 1
            rows.append(
                f'<tr><td class="ev-num">{number}</td>'
                f'<td class="ev-url">{escape_html(element.page_url)}</td>'
                f'<td class="ev-mono">{escape_html(element.selector)}</td>'
                f'<td class="ev-mono"><code>{escape_html(element.html)}</code></td></tr>'
            )
        parts.append(
            '<table class="evidence-table"><thead><tr><th>#</th><th>Page / URL</th>'
            "<th>Selector</th><th>HTML Snippet</th></tr></thead>"
            f'<tbody>{"".join(rows)}</tbody></table>'
        )
    return "\n".join(parts)


def rule_reference(issue: ReportIssue) -> str:
    help_url = validate_link_url(issue.help_url)
    if not help_url or help_url.startswith("mailto:"):
        return ""
    return f' &middot; <a href="{escape_html(help_url)}" class="rule-link">Rule reference</a>'


def render_appendix(data: ReportData, anchors: Sequence[str]) -> str:
    if not data.findings:
        blocks = '<div class="empty-state"><p>No accessibility issues were detected, so there is no evidence to list.</p></div>'
    else:
        blocks = "\n".join(
            f"""<div class="evidence-block" id="{anchor}">
  <h3>{escape_html(issue.title)} {severity_badge(issue.severity)}</h3>
  <p class="evidence-meta">Rule <code>{escape_html(issue.id)}</code> &middot; {plural(issue.affected_elements, "element")} affected{rule_reference(issue)}</p>
  {render_evidence_table(issue)}
</div>"""
            for issue, anchor in zip(data.findings, anchors)
        )
    return f"""<section class="page" id="appendix">
  {section_title("Evidence Appendix")}
  <p class="matrix-summary">Every affected element recorded by the scan, grouped by finding.</p>
  {blocks}
</section>"""


def render_cta(data: ReportData) -> str:
    cta = data.cta_config
    footer = f'<p class="cta-footer">{escape_html(data.white_label_config.footer_text)}</p>'
    cta_url = validate_link_url(cta.cta_url)
    support = ""
    if cta.support_email:
        email = escape_html(cta.support_email)
        support = f'<p>Questions? Contact <a href="mailto:{email}">{email}</a>.</p>'

    if not data.white_label_config.show_branding:
        button = ""
        if cta_url and cta_url != CTAConfig().cta_url:
            button = f'<a href="{escape_html(cta_url)}" class="cta-button">{escape_html(cta.cta_text)}</a>'
        return f"""<section class="page cta-page" id="next-steps">
  <div class="cta-center">
    <h2>Next Steps</h2>
    <p>Contact your accessibility partner to prioritise remediation, reduce accessibility risk and set up continuous monitoring.</p>
    {button}
    {footer}
  </div>
</section>"""

    button = (
        f'<a href="{escape_html(cta_url)}" class="cta-button">{escape_html(cta.cta_text)}</a>' if cta_url else ""
    )
    return f"""<section class="page cta-page" id="next-steps">
  <div class="cta-center">
    <h2>Upgrade to Continuous Monitoring</h2>
    <p>Catch regressions before your users do. Automated scanning, alerting and compliance tracking help you
    reduce accessibility risk release after release.</p>
    <table class="plan-table">
      <thead><tr><th>Feature</th><th>Free</th><th class="plan-highlight">Pro</th><th>Business</th></tr></thead>
      <tbody>
        <tr><td>Manual Scans</td><td>5/month</td><td>Unlimited</td><td>Unlimited</td></tr>
        <tr><td>Automated Monitoring</td><td>No</td><td>Weekly</td><td>Daily</td></tr>
        <tr><td>PDF Reports</td><td>Basic</td><td>Premium</td><td>White-label</td></tr>
        <tr><td>WCAG Compliance Tracking</td><td>No</td><td>Yes</td><td>Yes</td></tr>
        <tr><td>Team Collaboration</td><td>No</td><td>3 users</td><td>Unlimited</td></tr>
        <tr><td>API Access</td><td>No</td><td>No</td><td>Yes</td></tr>
      </tbody>
    </table>
    {button}
    {support}
    {footer}
  </div>
</section>"""


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

def needs_toc(data: ReportData) -> bool:
    return len(data.findings) >= TOC_MIN_FINDINGS or data.total_affected_elements >= TOC_MIN_ELEMENTS


def render_report_html(data: ReportData) -> str:
    """Render the complete report as a standalone HTML document."""
    primary = resolve_primary(data)
    css = build_css(safe_theme(data.theme_config), primary, data.report_style)
    anchors = finding_anchors(data.findings)
    anchor_by_rule: dict[str, str] = {}
    for issue, anchor in zip(data.findings, anchors):
        anchor_by_rule.setdefault(issue.id, anchor)

    favicon = ""
    favicon_url = safe_image_src(data.favicon_url)
    if favicon_url:
        favicon = f'<link rel="icon" href="{escape_html(favicon_url)}"/>\n'

    sections = [
        render_running_elements(data),
        render_cover(data),
        render_toc(data, anchors) if needs_toc(data) else "",
        render_executive_summary(data, anchor_by_rule),
        render_visual_breakdown(data, primary),
        render_wcag_matrix(data),
        render_priority_issues(data, anchors),
        render_findings_index(data, anchors),
        render_scan_config(data),
        render_compliance_legal(data),
        render_appendix(data, anchors),
        render_cta(data),
        f'<div class="version-marker" data-report-version="{REPORT_VERSION}">{escape_html(data.scan_id)}</div>',
    ]
    body = "\n".join(s for s in sections if s)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Accessibility Compliance Report | {escape_html(data.domain)}</title>
{favicon}<style>{css}</style>
</head>
<body class="style-{data.report_style.value}">
{body}
</body>
</html>
"""

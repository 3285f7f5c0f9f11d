"""Report data models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .branding import CTAConfig, ReportBranding, ReportStyle, ReportThemeConfig, WhiteLabelConfig
from .scan import Severity


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class MaturityLevel(str, Enum):
    BASIC = "Basic"
    STRUCTURED = "Structured"
    PROACTIVE = "Proactive"
    CONTINUOUS = "Continuous"


class WcagStatus(str, Enum):
    PASS = "pass"
    PARTIAL = "partial"
    FAIL = "fail"


class MatrixStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"
    NEEDS_MANUAL_REVIEW = "Needs Manual Review"
    NOT_TESTED = "Not Tested"


class IssueBreakdown(BaseModel):
    """Issue counts. ``total`` comes from the scan record, not from the sum."""

    total: int = Field(default=0, ge=0)
    critical: int = Field(default=0, ge=0)
    serious: int = Field(default=0, ge=0)
    moderate: int = Field(default=0, ge=0)
    minor: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class AffectedElement(BaseModel):
    selector: str
    html: str = ""
    page_url: str = ""

    model_config = ConfigDict(frozen=True)


class ReportIssue(BaseModel):
    id: str
    severity: Severity
    title: str
    explanation: str
    impact: str
    recommendation: str
    affected_elements: int = Field(ge=0)
    estimated_fix_time: str
    wcag_criteria: list[str] = []
    help_url: str = ""
    affected_element_details: list[AffectedElement] = []

    model_config = ConfigDict(frozen=True)


class HealthScore(BaseModel):
    value: int = Field(ge=0, le=100)
    grade: str
    label: str
    weighted_penalty: float
    normalized_penalty: float

    model_config = ConfigDict(frozen=True)


class WcagMatrixRow(BaseModel):
    criterion: str
    name: str
    level: str
    status: MatrixStatus
    related_findings: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def label(self) -> str:
        return f"{self.criterion} {self.name}"


class TopPriorityFix(BaseModel):
    rank: int = Field(ge=1, le=5)
    rule_id: str
    title: str
    severity: Severity
    affected_elements: int
    weighted_impact: int

    model_config = ConfigDict(frozen=True)


class ScanConfiguration(BaseModel):
    domain: str
    pages_analyzed: int = 1
    crawl_depth: str = "Single page"
    scan_date_time: str
    user_agent: str
    viewport: str
    standards_tested: list[str] = []
    engine_name: str
    engine_version: str

    model_config = ConfigDict(frozen=True)


class ReportData(BaseModel):
    """Everything the HTML renderer needs, built fresh per render."""

    company_name: str = ""
    domain: str
    scan_date: str
    scan_id: str
    score: int = Field(ge=0, le=100)
    compliance_level: str = "WCAG 2.2 AA"
    compliance_percentage: int
    wcag_aa_status: WcagStatus
    wcag_aaa_status: WcagStatus
    eaa_ready: bool
    risk_level: RiskLevel
    maturity_level: MaturityLevel
    issue_breakdown: IssueBreakdown
    findings: list[ReportIssue] = []
    priority_issues: list[ReportIssue] = []
    legal_risk: str
    risk_summary: str
    estimated_fix_time: str
    engine_name: str
    engine_version: str
    theme_config: ReportThemeConfig
    white_label_config: WhiteLabelConfig
    cta_config: CTAConfig
    report_style: ReportStyle = ReportStyle.PREMIUM
    page_title: Optional[str] = None
    pages_scanned: int = 1
    favicon_url: str = ""
    health_score: HealthScore
    health_score_previous: Optional[int] = None
    wcag_matrix: list[WcagMatrixRow] = []
    scan_config: ScanConfiguration
    top_priority_fixes: list[TopPriorityFix] = []
    scan_timestamp: str
    report_branding: Optional[ReportBranding] = None

    model_config = ConfigDict(frozen=True)

    @property
    def total_affected_elements(self) -> int:
        return sum(len(issue.affected_element_details) for issue in self.findings)

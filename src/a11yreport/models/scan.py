"""Scan input data models.

The persistence layer hands over a scan record whose ``raw`` payload is an
opaque axe-core result. These models give it an explicit shape while staying
lenient: a malformed violation is dropped, never raised.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @property
    def order(self) -> int:
        return SEVERITY_ORDER[self]


SEVERITY_ORDER: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.SERIOUS: 1,
    Severity.MODERATE: 2,
    Severity.MINOR: 3,
}


class ViolationNode(BaseModel):
    """One affected DOM element."""

    target: list[str] = []
    html: str = ""

    @field_validator("target", mode="before")
    @classmethod
    def _coerce_target(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple)):
            return []
        # axe nests selector lists for iframes and shadow roots
        result: list[str] = []
        for part in value:
            if isinstance(part, (list, tuple)):
                result.append(" > ".join(str(p) for p in part))
            elif part is not None:
                result.append(str(part))
        return result

    @field_validator("html", mode="before")
    @classmethod
    def _coerce_html(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @property
    def selector(self) -> str:
        return self.target[0] if self.target and self.target[0] else "unknown"


class Violation(BaseModel):
    """A single axe-core rule failure."""

    id: str
    impact: Optional[Severity] = None
    help: str = ""
    description: str = ""
    help_url: str = Field(default="", alias="helpUrl")
    tags: list[str] = []
    nodes: list[ViolationNode] = []

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("impact", mode="before")
    @classmethod
    def _coerce_impact(cls, value: Any) -> Optional[str]:
        if isinstance(value, Severity):
            return value.value
        if isinstance(value, str) and value.lower() in {s.value for s in Severity}:
            return value.lower()
        return None

    @field_validator("help", "description", "help_url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [t for t in value if isinstance(t, str)]

    @field_validator("nodes", mode="before")
    @classmethod
    def _coerce_nodes(cls, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        return [n for n in value if isinstance(n, (dict, ViolationNode))]

    @property
    def severity(self) -> Severity:
        """Impact with the axe default for unrated rules."""
        return self.impact or Severity.MINOR


def parse_violations(raw: Any) -> list[Violation]:
    """Extract violations from a raw scan payload.

    Accepts anything. Entries that are not mappings or fail validation are
    skipped; a payload without a ``violations`` list yields ``[]``.
    """
    if isinstance(raw, Violation):
        return [raw]
    if not isinstance(raw, dict):
        return []
    entries = raw.get("violations")
    if not isinstance(entries, (list, tuple)):
        return []

    violations: list[Violation] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, Violation):
            violations.append(entry)
            continue
        if not isinstance(entry, dict):
            logger.debug("Skipping violation #%d: not a mapping", index)
            continue
        try:
            violations.append(Violation.model_validate(entry))
        except ValidationError as e:
            logger.debug("Skipping violation #%d: %s", index, e.error_count())
    return violations


class ScanSite(BaseModel):
    url: str


class ScanPage(BaseModel):
    url: Optional[str] = None
    title: Optional[str] = None


class ScanInput(BaseModel):
    """Snapshot of a scan record as supplied by the persistence layer.

    Severity counts are validated non-negative here; this is the boundary
    that keeps contract violations away from the scoring engine.
    """

    id: str
    score: Optional[float] = Field(default=None, ge=0, le=100)
    issues: Optional[int] = Field(default=None, ge=0)
    impact_critical: Optional[int] = Field(default=None, ge=0, alias="impactCritical")
    impact_serious: Optional[int] = Field(default=None, ge=0, alias="impactSerious")
    impact_moderate: Optional[int] = Field(default=None, ge=0, alias="impactModerate")
    impact_minor: Optional[int] = Field(default=None, ge=0, alias="impactMinor")
    wcag_aa_compliance: Optional[float] = Field(default=None, alias="wcagAACompliance")
    wcag_aaa_compliance: Optional[float] = Field(default=None, alias="wcagAAACompliance")
    created_at: Union[datetime, str] = Field(alias="createdAt")
    raw: Any = None
    site: ScanSite
    page: Optional[ScanPage] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def page_url(self) -> str:
        """URL of the scanned page, falling back to the site URL."""
        if self.page and self.page.url:
            return self.page.url
        return self.site.url

    @property
    def created_at_iso(self) -> str:
        if isinstance(self.created_at, datetime):
            return self.created_at.isoformat()
        return self.created_at

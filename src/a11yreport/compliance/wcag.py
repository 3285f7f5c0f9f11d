"""WCAG 2.2 compliance matrix.

Maps the Level A and AA success criteria of WCAG 2.2 against the tags on
axe-core violations. 4.1.1 Parsing is obsolete in 2.2 and not tracked.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, NamedTuple, Sequence, TypeVar

from ..models.report import MatrixStatus, WcagMatrixRow
from ..models.scan import Violation

T = TypeVar("T")

MATRIX_PAGE_SIZE = 18
MAX_PASS_ROWS = 10
MAX_NOT_TESTED_ROWS = 5


class Criterion(NamedTuple):
    number: str
    name: str
    level: str

    @property
    def tag(self) -> str:
        """axe-core tag for this criterion (``1.4.3`` -> ``wcag143``)."""
        return "wcag" + self.number.replace(".", "")


WCAG_22_CRITERIA: tuple[Criterion, ...] = (
    Criterion("1.1.1", "Non-text Content", "A"),
    Criterion("1.2.1", "Audio-only and Video-only (Prerecorded)", "A"),
    Criterion("1.2.2", "Captions (Prerecorded)", "A"),
    Criterion("1.2.3", "Audio Description or Media Alternative (Prerecorded)", "A"),
    Criterion("1.2.4", "Captions (Live)", "AA"),
    Criterion("1.2.5", "Audio Description (Prerecorded)", "AA"),
    Criterion("1.3.1", "Info and Relationships", "A"),
    Criterion("1.3.2", "Meaningful Sequence", "A"),
    Criterion("1.3.3", "Sensory Characteristics", "A"),
    Criterion("1.3.4", "Orientation", "AA"),
    Criterion("1.3.5", "Identify Input Purpose", "AA"),
    Criterion("1.4.1", "Use of Color", "A"),
    Criterion("1.4.2", "Audio Control", "A"),
    Criterion("1.4.3", "Contrast (Minimum)", "AA"),
    Criterion("1.4.4", "Resize Text", "AA"),
    Criterion("1.4.5", "Images of Text", "AA"),
    Criterion("1.4.10", "Reflow", "AA"),
    Criterion("1.4.11", "Non-text Contrast", "AA"),
    Criterion("1.4.12", "Text Spacing", "AA"),
    Criterion("1.4.13", "Content on Hover or Focus", "AA"),
    Criterion("2.1.1", "Keyboard", "A"),
    Criterion("2.1.2", "No Keyboard Trap", "A"),
    Criterion("2.1.4", "Character Key Shortcuts", "A"),
    Criterion("2.2.1", "Timing Adjustable", "A"),
    Criterion("2.2.2", "Pause, Stop, Hide", "A"),
    Criterion("2.3.1", "Three Flashes or Below Threshold", "A"),
    Criterion("2.4.1", "Bypass Blocks", "A"),
    Criterion("2.4.2", "Page Titled", "A"),
    Criterion("2.4.3", "Focus Order", "A"),
    Criterion("2.4.4", "Link Purpose (In Context)", "A"),
    Criterion("2.4.5", "Multiple Ways", "AA"),
    Criterion("2.4.6", "Headings and Labels", "AA"),
    Criterion("2.4.7", "Focus Visible", "AA"),
    Criterion("2.4.11", "Focus Not Obscured (Minimum)", "AA"),
    Criterion("2.5.1", "Pointer Gestures", "A"),
    Criterion("2.5.2", "Pointer Cancellation", "A"),
    Criterion("2.5.3", "Label in Name", "A"),
    Criterion("2.5.4", "Motion Actuation", "A"),
    Criterion("2.5.7", "Dragging Movements", "AA"),
    Criterion("2.5.8", "Target Size (Minimum)", "AA"),
    Criterion("3.1.1", "Language of Page", "A"),
    Criterion("3.1.2", "Language of Parts", "AA"),
    Criterion("3.2.1", "On Focus", "A"),
    Criterion("3.2.2", "On Input", "A"),
    Criterion("3.2.3", "Consistent Navigation", "AA"),
    Criterion("3.2.4", "Consistent Identification", "AA"),
    Criterion("3.2.6", "Consistent Help", "A"),
    Criterion("3.3.1", "Error Identification", "A"),
    Criterion("3.3.2", "Labels or Instructions", "A"),
    Criterion("3.3.3", "Error Suggestion", "AA"),
    Criterion("3.3.4", "Error Prevention (Legal, Financial, Data)", "AA"),
    Criterion("3.3.7", "Redundant Entry", "A"),
    Criterion("3.3.8", "Accessible Authentication (Minimum)", "AA"),
    Criterion("4.1.2", "Name, Role, Value", "A"),
    Criterion("4.1.3", "Status Messages", "AA"),
)

# Criteria that need human judgement; automated tooling can only flag them.
MANUAL_REVIEW_CRITERIA: frozenset[str] = frozenset({
    "1.2.1", "1.2.2", "1.2.3", "1.2.4", "1.2.5",
    "1.3.3",
    "1.4.1", "1.4.2",
    "2.1.4",
    "2.2.1", "2.2.2",
    "2.3.1",
    "2.4.3", "2.4.5",
    "2.5.1", "2.5.4", "2.5.7",
    "3.2.1", "3.2.2", "3.2.3", "3.2.4", "3.2.6",
    "3.3.4", "3.3.7",
})

STATUS_ORDER: dict[MatrixStatus, int] = {
    MatrixStatus.FAIL: 0,
    MatrixStatus.NEEDS_MANUAL_REVIEW: 1,
    MatrixStatus.PASS: 2,
    MatrixStatus.NOT_TESTED: 3,
}

_CRITERIA_BY_TAG: dict[str, Criterion] = {c.tag: c for c in WCAG_22_CRITERIA}
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize_tag(tag: str) -> str:
    return _NON_ALNUM_RE.sub("", tag.lower())


def count_criterion_findings(violations: Iterable[Violation]) -> Counter[str]:
    """Count tracked-criterion tag occurrences, keyed by criterion number."""
    counts: Counter[str] = Counter()
    for violation in violations:
        for tag in violation.tags:
            criterion = _CRITERIA_BY_TAG.get(normalize_tag(tag))
            if criterion:
                counts[criterion.number] += 1
    return counts


def criterion_status(criterion: Criterion, related_findings: int, has_scan_data: bool) -> MatrixStatus:
    if not has_scan_data:
        return MatrixStatus.NOT_TESTED
    if related_findings > 0:
        return MatrixStatus.FAIL
    if criterion.number in MANUAL_REVIEW_CRITERIA:
        return MatrixStatus.NEEDS_MANUAL_REVIEW
    return MatrixStatus.PASS


def build_wcag_matrix(violations: Sequence[Violation]) -> list[WcagMatrixRow]:
    """Build one matrix row per tracked criterion.

    Rows are ordered Fail, Needs Manual Review, Pass, Not Tested; table
    order is kept within each status.
    """
    counts = count_criterion_findings(violations)
    has_scan_data = len(violations) > 0

    rows: list[WcagMatrixRow] = []
    for criterion in WCAG_22_CRITERIA:
        related = counts.get(criterion.number, 0)
        rows.append(WcagMatrixRow(
            criterion=criterion.number,
            name=criterion.name,
            level=criterion.level,
            status=criterion_status(criterion, related, has_scan_data),
            related_findings=related,
        ))

    rows.sort(key=lambda r: STATUS_ORDER[r.status])
    return rows


def select_matrix_rows(
    rows: Sequence[WcagMatrixRow],
    max_pass: int = MAX_PASS_ROWS,
    max_not_tested: int = MAX_NOT_TESTED_ROWS,
) -> list[WcagMatrixRow]:
    """Pick the rows shown in the report.

    Every failing and manual-review row is kept; passing and not-tested
    rows are sampled.
    """
    by_status: dict[MatrixStatus, list[WcagMatrixRow]] = {s: [] for s in STATUS_ORDER}
    for row in rows:
        by_status[row.status].append(row)

    return (
        by_status[MatrixStatus.FAIL]
        + by_status[MatrixStatus.NEEDS_MANUAL_REVIEW]
        + by_status[MatrixStatus.PASS][:max_pass]
        + by_status[MatrixStatus.NOT_TESTED][:max_not_tested]
    )


def summarize_matrix(rows: Iterable[WcagMatrixRow]) -> dict[MatrixStatus, int]:
    summary = {s: 0 for s in STATUS_ORDER}
    for row in rows:
        summary[row.status] += 1
    return summary


def paginate(items: Sequence[T], page_size: int = MATRIX_PAGE_SIZE) -> list[list[T]]:
    """Split ``items`` into pages. An empty sequence yields no pages."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return [list(items[i:i + page_size]) for i in range(0, len(items), page_size)]

"""Inline SVG charts for the HTML report."""

from __future__ import annotations

import math

from ..models.report import IssueBreakdown
from ..models.scan import Severity
from ..utils.sanitize import escape_html

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.CRITICAL: "#DC2626",
    Severity.SERIOUS: "#EA580C",
    Severity.MODERATE: "#D97706",
    Severity.MINOR: "#2563EB",
}

GOOD_COLOR = "#16A34A"
WARN_COLOR = "#D97706"
BAD_COLOR = "#DC2626"
TRACK_COLOR = "#E5E7EB"
MUTED_TEXT = "#6B7280"


def _num(value: float) -> str:
    """Fixed-precision number for SVG attributes."""
    if abs(value) < 0.005:
        return "0"
    return f"{value:.2f}".rstrip("0").rstrip(".")


def score_color(score: int) -> str:
    if score >= 80:
        return GOOD_COLOR
    if score >= 60:
        return WARN_COLOR
    return BAD_COLOR


def score_ring_svg(score: int, grade: str, size: int = 200) -> str:
    """Circular gauge showing the score out of 100 and its grade."""
    radius = 80
    circumference = 2 * math.pi * radius
    offset = circumference - (max(0, min(100, score)) / 100) * circumference
    color = score_color(score)
    return (
        f'<svg class="score-ring" width="{size}" height="{size}" viewBox="0 0 200 200" '
        f'xmlns="http://www.w3.org/2000/svg" role="img" aria-label="Health Score {score} out of 100">'
        f'<circle cx="100" cy="100" r="{radius}" fill="none" stroke="{TRACK_COLOR}" stroke-width="12"/>'
        f'<circle cx="100" cy="100" r="{radius}" fill="none" stroke="{color}" stroke-width="12" '
        f'stroke-dasharray="{_num(circumference)}" stroke-dashoffset="{_num(offset)}" '
        f'stroke-linecap="round" transform="rotate(-90 100 100)"/>'
        f'<text x="100" y="92" text-anchor="middle" font-size="48" font-weight="800" fill="{color}">{score}</text>'
        f'<text x="100" y="116" text-anchor="middle" font-size="14" fill="{MUTED_TEXT}">out of 100</text>'
        f'<text x="100" y="142" text-anchor="middle" font-size="18" font-weight="700" fill="{color}">'
        f"Grade {escape_html(grade)}</text>"
        "</svg>"
    )


def donut_chart_svg(breakdown: IssueBreakdown) -> str:
    """Severity distribution donut with a legend."""
    segments = [
        (Severity.CRITICAL, breakdown.critical),
        (Severity.SERIOUS, breakdown.serious),
        (Severity.MODERATE, breakdown.moderate),
        (Severity.MINOR, breakdown.minor),
    ]
    total = sum(value for _, value in segments)
    radius = 70
    circumference = 2 * math.pi * radius

    arcs: list[str] = []
    if total == 0:
        arcs.append(
            f'<circle cx="100" cy="100" r="{radius}" fill="none" stroke="{TRACK_COLOR}" stroke-width="28"/>'
        )
    else:
        cumulative = 0.0
        for severity, value in segments:
            if value == 0:
                continue
            length = value / total * circumference
            arcs.append(
                f'<circle cx="100" cy="100" r="{radius}" fill="none" stroke="{SEVERITY_COLORS[severity]}" '
                f'stroke-width="28" stroke-dasharray="{_num(length)} {_num(circumference - length)}" '
                f'stroke-dashoffset="{_num(-cumulative)}" transform="rotate(-90 100 100)"/>'
            )
            cumulative += length

    legend: list[str] = []
    for index, (severity, value) in enumerate(segments):
        y = 20 + index * 22
        legend.append(
            f'<g transform="translate(210, {y})">'
            f'<rect width="12" height="12" rx="2" fill="{SEVERITY_COLORS[severity]}"/>'
            f'<text x="18" y="11" font-size="12" fill="#374151">{severity.value.title()}: {value}</text>'
            "</g>"
        )

    return (
        '<svg class="donut-chart" width="360" height="200" viewBox="0 0 360 200" '
        'xmlns="http://www.w3.org/2000/svg" role="img" aria-label="Issues by severity">'
        + "".join(arcs)
        + '<circle cx="100" cy="100" r="50" fill="white"/>'
        f'<text x="100" y="96" text-anchor="middle" font-size="28" font-weight="700" fill="#1E1E1E">{total}</text>'
        f'<text x="100" y="116" text-anchor="middle" font-size="11" fill="{MUTED_TEXT}">Total Issues</text>'
        + "".join(legend)
        + "</svg>"
    )


def progress_bar_svg(label: str, pct: int, color: str, width: int = 300) -> str:
    """Horizontal bar for a 0-100 percentage."""
    pct = max(0, min(100, pct))
    bar_width = width - 120
    fill_width = round(pct / 100 * bar_width)
    return (
        f'<svg class="progress-bar" width="{width}" height="32" viewBox="0 0 {width} 32" '
        'xmlns="http://www.w3.org/2000/svg">'
        f'<text x="0" y="20" font-size="12" fill="#374151">{escape_html(label)}</text>'
        f'<rect x="80" y="8" width="{bar_width}" height="16" rx="8" fill="{TRACK_COLOR}"/>'
        f'<rect x="80" y="8" width="{fill_width}" height="16" rx="8" fill="{color}"/>'
        f'<text x="{80 + bar_width + 6}" y="21" font-size="12" font-weight="600" fill="{color}">{pct}%</text>'
        "</svg>"
    )

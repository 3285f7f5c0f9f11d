"""Shared fixtures for a11yreport tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def make_violation(rule_id: str, impact: str, node_count: int, tags: list[str], page: str = "/") -> dict:
    """Build an axe-core violation dict with ``node_count`` distinct nodes."""
    return {
        "id": rule_id,
        "impact": impact,
        "help": f"Help for {rule_id}",
        "description": f"Description of {rule_id}",
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.10/{rule_id}",
        "tags": tags,
        "nodes": [
            {"target": [f"#{rule_id}-{i}"], "html": f'<div id="{rule_id}-{i}">{page}</div>'}
            for i in range(1, node_count + 1)
        ],
    }


def make_scan(violations: list[dict], **overrides) -> dict:
    """Build a scan record in the persistence layer's shape."""
    scan = {
        "id": "scan-test-001",
        "score": 65,
        "issues": 7,
        "impactCritical": 2,
        "impactSerious": 3,
        "impactModerate": 1,
        "impactMinor": 1,
        "createdAt": "2025-02-20T05:00:00.000Z",
        "raw": {"violations": violations},
        "site": {"url": "https://example.com"},
        "page": {"url": "https://example.com/about", "title": "About Us"},
    }
    scan.update(overrides)
    return scan


@pytest.fixture
def sample_violations() -> list[dict]:
    """Four violations, one per severity, seven nodes in total."""
    return [
        make_violation("color-contrast", "serious", 3, ["wcag143", "wcag2aa"]),
        make_violation("image-alt", "critical", 2, ["wcag111", "wcag2a"]),
        make_violation("label", "moderate", 1, ["wcag332", "wcag2a"]),
        make_violation("link-name", "minor", 1, ["wcag244", "wcag2a"]),
    ]


@pytest.fixture
def sample_scan(sample_violations: list[dict]) -> dict:
    return make_scan(sample_violations)


@pytest.fixture
def clean_scan() -> dict:
    """A scan with no violations and no issues."""
    return make_scan(
        [],
        score=100,
        issues=0,
        impactCritical=0,
        impactSerious=0,
        impactModerate=0,
        impactMinor=0,
    )


@pytest.fixture
def scan_file(tmp_path: Path, sample_scan: dict) -> Path:
    path = tmp_path / "scan.json"
    path.write_text(json.dumps(sample_scan), encoding="utf-8")
    return path


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "report:\n"
        '  engine_version: "4.9"\n'
        "white_label:\n"
        "  logo_url: https://res.cloudinary.com/acme/logo.png\n"
        '  primary_color: "#0F766E"\n'
        "  company_name: Acme Audits\n"
        "  show_branding: false\n"
        "  footer_text: Prepared by Acme Audits\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def violation_factory():
    return make_violation


@pytest.fixture
def scan_factory():
    return make_scan

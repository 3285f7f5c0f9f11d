"""Tests for core/rules.py."""

from __future__ import annotations

import pytest

from a11yreport.core.rules import (
    RULE_EXPLANATIONS,
    extract_wcag_criteria,
    format_wcag_tag,
    get_rule_explanation,
)


class TestRuleExplanations:
    @pytest.mark.parametrize(
        "rule_id",
        [
            "color-contrast", "image-alt", "label", "link-name", "button-name",
            "html-has-lang", "document-title", "heading-order", "landmark-one-main", "region",
        ],
    )
    def test_core_rules_present(self, rule_id):
        explanation = get_rule_explanation(rule_id)
        assert explanation is not None
        assert explanation.title
        assert explanation.recommendation

    def test_unknown_rule(self):
        assert get_rule_explanation("made-up-rule") is None

    def test_non_string_rule(self):
        assert get_rule_explanation(None) is None

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            RULE_EXPLANATIONS["new-rule"] = RULE_EXPLANATIONS["label"]


class TestFormatWcagTag:
    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("wcag143", "1.4.3"),
            ("wcag111", "1.1.1"),
            ("wcag2411", "2.4.11"),
            ("WCAG412", "4.1.2"),
        ],
    )
    def test_criterion_tags(self, tag, expected):
        assert format_wcag_tag(tag) == expected

    @pytest.mark.parametrize("tag", ["wcag2a", "wcag2aa", "wcag21aa", "best-practice", "cat.color", ""])
    def test_non_criterion_tags(self, tag):
        assert format_wcag_tag(tag) is None


class TestExtractWcagCriteria:
    def test_filters_and_formats(self):
        assert extract_wcag_criteria(["cat.color", "wcag2aa", "wcag143"]) == ["1.4.3"]

    def test_limit(self):
        tags = ["wcag111", "wcag143", "wcag244", "wcag332"]
        assert extract_wcag_criteria(tags) == ["1.1.1", "1.4.3", "2.4.4"]
        assert extract_wcag_criteria(tags, limit=1) == ["1.1.1"]

    def test_duplicates_removed(self):
        assert extract_wcag_criteria(["wcag143", "WCAG143", "wcag111"]) == ["1.4.3", "1.1.1"]

    def test_empty(self):
        assert extract_wcag_criteria([]) == []

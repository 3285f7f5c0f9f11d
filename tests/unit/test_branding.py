"""Tests for white-label resolution in core/branding.py."""

from __future__ import annotations

import pytest

from a11yreport.core.branding import (
    extract_query_overrides,
    is_allowed_host,
    resolve_white_label_config,
    validate_hex,
    validate_image_url,
    validate_link_url,
)
from a11yreport.models.branding import (
    DEFAULT_PRIMARY_COLOR,
    CTAConfig,
    QueryParamOverrides,
    ReportStyle,
    StoredWhiteLabelSettings,
    WhiteLabelConfig,
)


class TestValidateHex:
    @pytest.mark.parametrize("value,expected", [("#0F766E", "#0F766E"), ("0f766e", "#0f766e"), ("#abcdef", "#abcdef")])
    def test_valid(self, value, expected):
        assert validate_hex(value) == expected

    @pytest.mark.parametrize("value", ["", None, "#FFF", "#GGGGGG", "red", "#0F766E\n", "#0F766E;x:y", "#1234567"])
    def test_invalid(self, value):
        assert validate_hex(value) is None


class TestValidateImageUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://vexnexa.com/logo.png",
            "https://res.cloudinary.com/acme/logo.png",
            "https://cdn.res.cloudinary.com/logo.png",
            "http://localhost:3000/logo.svg",
            "https://i.imgur.com/abc.png?size=2",
        ],
    )
    def test_allowed(self, url):
        assert validate_image_url(url) == url

    @pytest.mark.parametrize(
        "url",
        [
            "https://evil.example.com/x.png",
            "https://evil.example/logo.png",
            "https://res.cloudinary.com.evil.example/logo.png",
            "https://user:pw@res.cloudinary.com/logo.png",
            "javascript:alert(1)",
            "data:image/png;base64,AAAA",
            "//res.cloudinary.com/logo.png",
            "/logo.png",
            "ftp://localhost/logo.png",
            "https://res.cloudinary.com/a b.png",
            "",
            None,
        ],
    )
    def test_rejected(self, url):
        assert validate_image_url(url) == ""

    def test_surrounding_whitespace_trimmed(self):
        assert validate_image_url("  https://i.imgur.com/a.png ") == "https://i.imgur.com/a.png"

    def test_host_matching_is_case_insensitive(self):
        assert is_allowed_host("I.IMGUR.COM")
        assert not is_allowed_host("imgur.com")


class TestValidateLinkUrl:
    @pytest.mark.parametrize("url", ["https://acme.example/contact", "http://acme.example", "mailto:help@acme.example"])
    def test_allowed(self, url):
        assert validate_link_url(url) == url

    @pytest.mark.parametrize("url", ["javascript:alert(1)", "mailto:", "https://", "https://u:p@acme.example", "acme.example"])
    def test_rejected(self, url):
        assert validate_link_url(url) == ""


class TestResolveWhiteLabelConfig:
    def test_defaults(self):
        resolved = resolve_white_label_config({})
        assert resolved.white_label_config == WhiteLabelConfig()
        assert resolved.cta_config == CTAConfig()
        assert resolved.report_style == ReportStyle.PREMIUM
        assert resolved.theme_config.primary_color == DEFAULT_PRIMARY_COLOR
        assert resolved.favicon_url == ""

    def test_none_query(self):
        assert resolve_white_label_config(None).white_label_config.show_branding is True

    def test_query_beats_stored(self):
        stored = StoredWhiteLabelSettings(primary_color="#111111", company_name="Stored Co")
        resolved = resolve_white_label_config({"color": "#222222", "company": "Query Co"}, stored)
        assert resolved.white_label_config.primary_color == "#222222"
        assert resolved.theme_config.primary_color == "#222222"
        assert resolved.white_label_config.company_name_override == "Query Co"

    def test_invalid_query_falls_through_to_stored(self):
        stored = StoredWhiteLabelSettings(primary_color="#111111", logo_url="https://i.imgur.com/a.png")
        resolved = resolve_white_label_config({"color": "not-a-color", "logo": "https://evil.example/x.png"}, stored)
        assert resolved.white_label_config.primary_color == "#111111"
        assert resolved.white_label_config.logo_url == "https://i.imgur.com/a.png"

    def test_invalid_everywhere_uses_default(self):
        stored = StoredWhiteLabelSettings(primary_color="#12")
        resolved = resolve_white_label_config({"color": "zzz"}, stored)
        assert resolved.white_label_config.primary_color == DEFAULT_PRIMARY_COLOR

    def test_branding_false_hides(self):
        stored = StoredWhiteLabelSettings(show_branding=True)
        assert resolve_white_label_config({"branding": "false"}, stored).white_label_config.show_branding is False

    def test_branding_other_values_use_stored(self):
        stored = StoredWhiteLabelSettings(show_branding=False)
        assert resolve_white_label_config({"branding": "true"}, stored).white_label_config.show_branding is False
        assert resolve_white_label_config({"branding": "no"}).white_label_config.show_branding is True

    def test_report_style(self):
        assert resolve_white_label_config({"report_style": "corporate"}).report_style == ReportStyle.CORPORATE
        assert resolve_white_label_config({"reportStyle": "corporate"}).report_style == ReportStyle.CORPORATE
        assert resolve_white_label_config({"report_style": "fancy"}).report_style == ReportStyle.PREMIUM

    def test_footer_text_from_stored(self):
        stored = StoredWhiteLabelSettings(footer_text="Prepared by Acme")
        assert resolve_white_label_config({}, stored).white_label_config.footer_text == "Prepared by Acme"

    def test_cta(self):
        stored = StoredWhiteLabelSettings(cta_text="Book a review", support_email="help@acme.example")
        resolved = resolve_white_label_config(
            QueryParamOverrides(cta_url="javascript:alert(1)"),
            stored,
        )
        assert resolved.cta_config.cta_url == CTAConfig().cta_url
        assert resolved.cta_config.cta_text == "Book a review"
        assert resolved.cta_config.support_email == "help@acme.example"

    def test_favicon_validated(self):
        assert resolve_white_label_config({"favicon": "https://i.imgur.com/f.ico"}).favicon_url == "https://i.imgur.com/f.ico"
        assert resolve_white_label_config({"favicon": "https://evil.example/f.ico"}).favicon_url == ""

    def test_blank_company_ignored(self):
        stored = StoredWhiteLabelSettings(company_name="Stored Co")
        resolved = resolve_white_label_config({"company": "   "}, stored)
        assert resolved.white_label_config.company_name_override == "Stored Co"


class TestExtractQueryOverrides:
    def test_parses_known_keys(self):
        q = extract_query_overrides(
            "https://app.example/report?color=%230F766E&branding=false&reportStyle=corporate&ctaText=Hi&junk=1"
        )
        assert q.color == "#0F766E"
        assert q.branding == "false"
        assert q.report_style == "corporate"
        assert q.cta_text == "Hi"

    def test_first_value_wins(self):
        assert extract_query_overrides("/r?company=A&company=B").company == "A"

    def test_no_query(self):
        assert extract_query_overrides("https://app.example/report") == QueryParamOverrides()

"""White-label, theme and CTA data models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRIMARY_COLOR = "#D45A00"
DEFAULT_BRAND_NAME = "VexNexa"


class ReportStyle(str, Enum):
    PREMIUM = "premium"
    CORPORATE = "corporate"


class ReportThemeConfig(BaseModel):
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = "#1E293B"
    accent_color: str = "#0EA5E9"
    background_color: str = "#F8FAFC"
    dark_color: str = "#0F172A"

    model_config = ConfigDict(frozen=True)


class WhiteLabelConfig(BaseModel):
    show_branding: bool = True
    logo_url: str = ""
    primary_color: str = DEFAULT_PRIMARY_COLOR
    footer_text: str = f"{DEFAULT_BRAND_NAME} | Accessibility monitoring and compliance reporting"
    company_name_override: str = ""

    model_config = ConfigDict(frozen=True)


class CTAConfig(BaseModel):
    cta_url: str = "https://www.vexnexa.com/pricing"
    cta_text: str = "View Plans & Pricing"
    support_email: str = "support@vexnexa.com"

    model_config = ConfigDict(frozen=True)


class ReportBranding(BaseModel):
    """Optional brand override for the running footer and cover logo."""

    company_name: Optional[str] = None
    logo_url: Optional[str] = None
    primary_color: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class QueryParamOverrides(BaseModel):
    """Raw query-string overrides from the request URL."""

    logo: Optional[str] = None
    color: Optional[str] = None
    company: Optional[str] = None
    branding: Optional[str] = None
    favicon: Optional[str] = None
    report_style: Optional[str] = Field(default=None, alias="reportStyle")
    cta_url: Optional[str] = Field(default=None, alias="ctaUrl")
    cta_text: Optional[str] = Field(default=None, alias="ctaText")
    support_email: Optional[str] = Field(default=None, alias="supportEmail")

    model_config = ConfigDict(populate_by_name=True)


class StoredWhiteLabelSettings(BaseModel):
    """Per-user white-label settings from persistence."""

    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    favicon_url: Optional[str] = Field(default=None, alias="faviconUrl")
    primary_color: Optional[str] = Field(default=None, alias="primaryColor")
    company_name: Optional[str] = Field(default=None, alias="companyName")
    show_branding: Optional[bool] = Field(default=None, alias="showBranding")
    footer_text: Optional[str] = Field(default=None, alias="footerText")
    cta_url: Optional[str] = Field(default=None, alias="ctaUrl")
    cta_text: Optional[str] = Field(default=None, alias="ctaText")
    support_email: Optional[str] = Field(default=None, alias="supportEmail")

    model_config = ConfigDict(populate_by_name=True)


class ResolvedWhiteLabel(BaseModel):
    white_label_config: WhiteLabelConfig
    theme_config: ReportThemeConfig
    cta_config: CTAConfig
    report_style: ReportStyle
    favicon_url: str = ""

    model_config = ConfigDict(frozen=True)

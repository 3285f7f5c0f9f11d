"""Inline style sheet for the HTML report, keyed by report style."""

from __future__ import annotations

from string import Template

from ..models.branding import ReportStyle, ReportThemeConfig

_BASE_CSS = Template("""
:root{--space-xs:4px;--space-sm:8px;--space-md:16px;--space-lg:24px;--space-xl:32px;--space-2xl:48px;
  --mono:ui-monospace,'SF Mono',SFMono-Regular,Menlo,Consolas,'Liberation Mono',monospace;
  --primary:$primary;--secondary:$secondary;--accent:$accent;--bg:$bg;--dark:$dark}
*,*::before,*::after{box-sizing:border-box;margin:0;padding:0}
@page{size:A4;margin:18mm 16mm}
body{font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,'Helvetica Neue',Arial,sans-serif;
  color:$dark;background:#F3F4F6;line-height:1.6;font-size:14px;-webkit-print-color-adjust:exact;print-color-adjust:exact}
a{color:$primary}
code{font-family:var(--mono);font-size:11px}

.page{width:210mm;min-height:297mm;padding:22mm var(--space-lg);margin:0 auto;position:relative;page-break-after:always;background:white}
@media screen{.page{box-shadow:0 4px 24px rgba(0,0,0,.08);margin-bottom:var(--space-lg);border-radius:4px}}

.running-header,.running-footer{display:none}
.version-marker{display:none}

/* Cover */
.cover-page{display:flex;flex-direction:column;justify-content:space-between;align-items:center;text-align:center;
  background:linear-gradient(180deg,$bg 0%,white 100%)}
.cover-top{width:100%;text-align:left}
.cover-logo{max-height:48px;max-width:200px}
.cover-monogram{display:inline-flex;align-items:center;justify-content:center;width:48px;height:48px;border-radius:12px;
  background:$primary;color:white;font-size:18px;font-weight:800;letter-spacing:0.5px}
.cover-center{flex:1;display:flex;flex-direction:column;align-items:center;justify-content:center;gap:var(--space-md)}
.cover-audit-label{font-size:12px;font-weight:700;letter-spacing:1.5px;text-transform:uppercase;color:$primary}
.cover-title{font-size:36px;font-weight:800;line-height:1.15;color:$dark;letter-spacing:-1px}
.cover-domain{display:flex;flex-direction:column;gap:var(--space-xs)}
.cover-domain-label{font-size:11px;font-weight:600;letter-spacing:1px;text-transform:uppercase;color:#9CA3AF}
.cover-domain-value{font-size:20px;font-weight:600;color:$secondary;word-break:break-all}
.cover-info-line{font-size:13px;color:#6B7280}
.cover-score-card{display:flex;flex-direction:column;align-items:center;gap:var(--space-xs);margin:var(--space-md) 0}
.csc-label{font-size:12px;font-weight:700;letter-spacing:1px;text-transform:uppercase;color:#6B7280}
.csc-grade-label{font-size:13px;color:#4B5563}
.cover-badges{display:flex;gap:10px;flex-wrap:wrap;justify-content:center}
.badge{display:inline-block;padding:6px 16px;border-radius:20px;font-size:12px;font-weight:600;letter-spacing:0.3px}
.badge-compliance{background:#EFF6FF;color:#1D4ED8}
.badge-ready{background:#DCFCE7;color:#166534}
.badge-not-ready{background:#FEF9C3;color:#854D0E}
.cover-bottom{width:100%;text-align:center;padding-top:var(--space-md);border-top:1px solid #E5E7EB}
.cover-company{font-size:14px;font-weight:600;color:#374151;margin-bottom:var(--space-xs)}
.cover-page-title{font-size:14px;color:#6B7280}
.cover-date{font-size:13px;color:#9CA3AF}
.cover-powered{font-size:11px;color:#D1D5DB;margin-top:var(--space-xs)}

/* Table of contents */
.toc-nav ol{list-style:none}
.toc-nav li{padding:var(--space-xs) 0;border-bottom:1px dotted #E5E7EB}
.toc-nav a{text-decoration:none;color:$dark}
.toc-level-2{font-weight:700;font-size:14px}
.toc-level-3{padding-left:var(--space-lg)!important;font-size:12px;color:#4B5563}

/* Section titles */
.section-title{font-size:24px;font-weight:800;margin-bottom:var(--space-lg);padding-bottom:var(--space-sm);border-bottom:3px solid $primary;letter-spacing:-0.5px}
.subsection-title{font-size:16px;font-weight:700;margin:20px 0 12px;color:#374151}
.chunk-label{font-size:11px;color:#9CA3AF;font-weight:600}

/* Executive summary */
.exec-health-row{display:flex;gap:var(--space-lg);align-items:center;margin-bottom:var(--space-lg)}
.exec-health-badge{display:flex;flex-direction:column;align-items:center;padding:var(--space-md) var(--space-lg);
  border-radius:16px;background:$bg;border:2px solid $primary;min-width:180px}
.ehb-title{font-size:12px;font-weight:700;letter-spacing:1px;text-transform:uppercase;color:#6B7280}
.ehb-score{font-size:48px;font-weight:800;line-height:1.1;font-variant-numeric:tabular-nums}
.ehb-grade{font-size:14px;font-weight:700}
.ehb-label{font-size:13px;color:#4B5563}
.ehb-trend{font-size:12px;color:#6B7280}
.exec-health-copy p{font-size:13px;color:#4B5563;margin-bottom:var(--space-sm)}
.microcopy{font-size:12px;color:#6B7280;font-style:italic}
.exec-cards{display:grid;gap:var(--space-md);margin-bottom:var(--space-lg)}
.exec-card{background:$bg;border-radius:12px;padding:var(--space-md) var(--space-lg);border:1px solid #E5E7EB}
.exec-card h3{font-size:14px;font-weight:700;color:#374151;margin-bottom:var(--space-sm);text-transform:uppercase;letter-spacing:0.5px}
.exec-card p{font-size:13px;color:#4B5563;margin-bottom:var(--space-xs)}
.risk-label{font-weight:700}
.risk-low{color:#16A34A}.risk-medium{color:#D97706}.risk-high{color:#EA580C}.risk-critical{color:#DC2626}

.tpf-table,.wcag-matrix-table,.data-table,.issues-table{width:100%;border-collapse:collapse;font-size:12.5px}
.tpf-table th,.tpf-table td,.wcag-matrix-table th,.wcag-matrix-table td,.data-table th,.data-table td,
.issues-table th,.issues-table td{padding:var(--space-sm) 10px;border-bottom:1px solid #E5E7EB;text-align:left;vertical-align:top}
.tpf-table th,.wcag-matrix-table th,.data-table th,.issues-table th{background:#F9FAFB;font-size:11px;text-transform:uppercase;
  letter-spacing:0.4px;color:#6B7280}
.num{text-align:right;font-variant-numeric:tabular-nums}

.metrics-grid{display:grid;grid-template-columns:repeat(4,1fr);gap:12px}
.metric-card{background:white;border:1px solid #E5E7EB;border-radius:12px;padding:var(--space-md);text-align:center;
  box-shadow:0 1px 3px rgba(0,0,0,.04)}
.metric-value{font-size:26px;font-weight:800;line-height:1.1;font-variant-numeric:tabular-nums}
.metric-label{font-size:11px;color:#6B7280;margin-top:var(--space-xs);text-transform:uppercase;letter-spacing:0.5px;font-weight:600}

/* Visual breakdown */
.breakdown-grid{display:grid;grid-template-columns:1fr 1fr;gap:20px}
.breakdown-card{background:$bg;border-radius:12px;padding:20px;border:1px solid #E5E7EB}
.breakdown-card h3{font-size:14px;font-weight:700;color:#374151;margin-bottom:var(--space-md);text-transform:uppercase;letter-spacing:0.5px}
.chart-center{display:flex;justify-content:center}
.progress-stack{display:flex;flex-direction:column;gap:var(--space-md);padding-top:var(--space-sm)}
.mt-24{margin-top:var(--space-lg)}
.status-table{width:100%;border-collapse:collapse}
.status-table td{padding:10px 12px;border-bottom:1px solid #E5E7EB;font-size:13px}
.status-table td:first-child{font-weight:600;color:#374151}
.status-dot{display:inline-block;width:10px;height:10px;border-radius:50%;margin-right:var(--space-sm);vertical-align:middle}
.maturity-indicator{display:flex;gap:var(--space-sm);margin-top:12px}
.maturity-step{flex:1;text-align:center;padding:12px 4px;border-radius:8px;border:2px solid #E5E7EB;font-size:11px;color:#9CA3AF}
.maturity-step.reached{border-color:$primary;color:$primary;font-weight:600}
.maturity-step.active{background:$bg}
.maturity-dot{width:12px;height:12px;border-radius:50%;margin:0 auto 6px;background:#D1D5DB}
.maturity-step.reached .maturity-dot{background:$primary}

/* WCAG matrix */
.matrix-legend{display:flex;flex-wrap:wrap;gap:var(--space-md);margin-bottom:var(--space-md);font-size:12px;color:#4B5563}
.legend-item{display:inline-flex;align-items:center;gap:var(--space-xs)}
.coverage-note{font-size:12px;color:#6B7280;background:$bg;border-left:3px solid $accent;padding:var(--space-sm) var(--space-md);margin-bottom:var(--space-md)}
.matrix-summary{font-size:12px;color:#4B5563;margin-bottom:var(--space-md)}
.status-pill{display:inline-block;padding:2px 10px;border-radius:12px;font-size:11px;font-weight:700;white-space:nowrap}
.status-pass{background:#DCFCE7;color:#166534}
.status-fail{background:#FEE2E2;color:#991B1B}
.status-manual{background:#FEF3C7;color:#92400E}
.status-not-tested{background:#F3F4F6;color:#4B5563}

/* Priority issues */
.issues-list{display:flex;flex-direction:column;gap:var(--space-md)}
.issue-card{border:1px solid #E5E7EB;border-radius:12px;overflow:hidden;box-shadow:0 1px 3px rgba(0,0,0,.04)}
.issue-header{display:flex;align-items:center;gap:10px;padding:12px var(--space-md);background:$bg;border-bottom:1px solid #E5E7EB}
.issue-num{display:inline-flex;align-items:center;justify-content:center;width:28px;height:28px;border-radius:50%;
  background:$primary;color:white;font-size:12px;font-weight:700;flex-shrink:0}
.severity-badge{padding:3px 10px;border-radius:12px;font-size:10px;font-weight:700;letter-spacing:0.5px;flex-shrink:0;text-transform:uppercase}
.sev-critical{background:#FEF2F2;color:#DC2626}.sev-serious{background:#FFF7ED;color:#EA580C}
.sev-moderate{background:#FFFBEB;color:#D97706}.sev-minor{background:#EFF6FF;color:#2563EB}
.issue-title{font-size:14px;font-weight:700;color:$dark;flex:1}
.issue-body{padding:14px var(--space-md)}
.issue-row{margin-bottom:10px}
.issue-row strong{font-size:11px;text-transform:uppercase;letter-spacing:0.4px;color:#6B7280;display:block;margin-bottom:2px}
.issue-row p{font-size:12.5px;color:#374151;line-height:1.5}
.issue-meta{display:flex;flex-wrap:wrap;gap:var(--space-md);padding-top:10px;border-top:1px solid #F3F4F6;font-size:11px;color:#9CA3AF}
.empty-state{text-align:center;padding:60px 20px;color:#6B7280;font-size:16px}

/* Evidence appendix */
.evidence-block{margin-bottom:var(--space-xl)}
.evidence-block h3{font-size:15px;font-weight:700;margin-bottom:var(--space-sm)}
.evidence-meta{font-size:12px;color:#6B7280;margin-bottom:var(--space-sm)}
.evidence-table{width:100%;max-width:100%;table-layout:fixed;border-collapse:collapse;font-size:11px;margin-bottom:var(--space-md)}
.evidence-table th{background:#F9FAFB;text-align:left;padding:var(--space-sm);font-size:10px;text-transform:uppercase;color:#6B7280}
.evidence-table th:first-child{width:5%}
.evidence-table th:nth-child(2){width:25%}
.evidence-table th:nth-child(3){width:25%}
.evidence-table th:nth-child(4){width:45%}
.evidence-table td{padding:var(--space-sm) var(--space-sm);min-height:32px;border-bottom:1px solid #E5E7EB;vertical-align:top;
  overflow-wrap:anywhere;word-break:break-word}
.ev-num{color:#9CA3AF;font-variant-numeric:tabular-nums}
.ev-url{font-family:var(--mono);word-break:break-all;color:#4B5563}
.ev-mono{font-family:var(--mono);white-space:pre-wrap}

/* Compliance & legal */
.legal-grid{display:flex;flex-direction:column;gap:var(--space-md)}
.legal-card{background:$bg;border-radius:12px;padding:20px;border:1px solid #E5E7EB}
.legal-card h3{font-size:14px;font-weight:700;color:#374151;margin-bottom:10px;text-transform:uppercase;letter-spacing:0.5px}
.legal-card p{font-size:13px;color:#4B5563;margin-bottom:var(--space-sm);line-height:1.6}
.legal-card ul{margin:var(--space-sm) 0 0 20px;font-size:13px;color:#4B5563}
.legal-card li{margin-bottom:var(--space-xs)}
.audit-table{width:100%;border-collapse:collapse}
.audit-table td{padding:var(--space-sm) 12px;border-bottom:1px solid #E5E7EB;font-size:13px}
.audit-table td:first-child{font-weight:600;color:#374151;width:140px}

/* CTA */
.cta-page{display:flex;align-items:center;justify-content:center}
.cta-center{text-align:center;max-width:600px}
.cta-center h2{font-size:28px;font-weight:800;margin-bottom:12px;color:$primary}
.cta-center p{font-size:14px;color:#4B5563;margin-bottom:20px;line-height:1.6}
.cta-button{display:inline-block;padding:14px 36px;background:$primary;color:white;border-radius:12px;font-size:16px;font-weight:700;
  text-decoration:none;margin:20px 0;box-shadow:0 4px 12px rgba(0,0,0,.15)}
.cta-footer{font-size:11px;color:#9CA3AF;margin-top:var(--space-lg)}
.plan-table{width:100%;border-collapse:collapse;margin:var(--space-md) 0;text-align:center;font-size:13px}
.plan-table th,.plan-table td{padding:10px 12px;border:1px solid #E5E7EB}
.plan-table th{font-weight:700;background:#F9FAFB}
.plan-table th.plan-highlight{background:$primary;color:white}
.plan-table td:first-child{text-align:left;font-weight:600}

@media (min-width:768px) and (max-width:1024px){
  .page{width:100%;min-height:auto}
  .metrics-grid{grid-template-columns:repeat(2,1fr)}
}
@media (max-width:767px){
  .page{width:100%;min-height:auto;padding:var(--space-lg) var(--space-md)}
  .exec-health-row{flex-direction:column}
  .breakdown-grid,.metrics-grid{grid-template-columns:1fr}
}

@media print{
  body{background:white}
  .page{box-shadow:none;margin:0;border-radius:0;width:100%;min-height:auto;padding:18mm 16mm}
  .running-header{display:flex;justify-content:space-between;position:fixed;top:6mm;left:16mm;right:16mm;font-size:9px;color:#9CA3AF}
  .running-footer{display:flex;justify-content:space-between;position:fixed;bottom:6mm;left:16mm;right:16mm;font-size:9px;color:#9CA3AF}
  p{orphans:3;widows:3}
  h2,h3{page-break-after:avoid}
  h3{page-break-after:avoid}
  .issue-card,.exec-card,.legal-card,.breakdown-card,.metric-card{page-break-inside:avoid}
  .evidence-table thead,.tpf-table thead,.wcag-matrix-table thead,.issues-table thead,.data-table thead{display:table-header-group}
  .evidence-table tr,.wcag-matrix-table tr,.issues-table tr{page-break-inside:avoid}
  .cta-button{border:2px solid $primary;color:$primary!important;background:transparent!important}
}
""")

_CORPORATE_CSS = Template("""
/* Corporate style */
body{font-size:13px}
.cover-page{background:white;border-top:8px solid $primary}
.cover-title{font-size:32px;letter-spacing:-0.5px}
.cover-score-card-corp{display:flex;flex-direction:column;gap:var(--space-sm);min-width:280px;padding:var(--space-md) var(--space-lg);
  border:1px solid #D1D5DB;border-radius:8px;background:white;box-shadow:0 1px 2px rgba(0,0,0,.05);
  -webkit-print-color-adjust:exact;print-color-adjust:exact}
.csc-score{font-size:40px;font-weight:800;line-height:1;font-variant-numeric:tabular-nums;color:$dark}
.csc-bar-track{height:8px;border-radius:4px;background:#E5E7EB;overflow:hidden}
.csc-bar-fill{height:100%;border-radius:4px}
.cover-severity-bar{display:flex;flex-wrap:wrap;justify-content:center;gap:var(--space-sm);font-size:12px;color:#4B5563}
.csb-item{display:inline-flex;align-items:center;gap:var(--space-xs)}
.csb-count{font-weight:700;font-variant-numeric:tabular-nums}
.csb-name{color:#4B5563}
.csb-sep{color:#E5E7EB}
.section-title{font-size:20px;border-bottom-width:2px}
.exec-card,.breakdown-card,.legal-card{border-radius:4px}
.metric-card{border-radius:4px;box-shadow:none}
.issues-table .issue-rec{font-size:11.5px;color:#4B5563}
""")


def build_css(theme: ReportThemeConfig, primary: str, style: ReportStyle) -> str:
    """Render the style sheet for a theme. ``primary`` must already be a validated hex colour."""
    values = {
        "primary": primary,
        "secondary": theme.secondary_color,
        "accent": theme.accent_color,
        "bg": theme.background_color,
        "dark": theme.dark_color,
    }
    css = _BASE_CSS.substitute(values)
    if style == ReportStyle.CORPORATE:
        css += _CORPORATE_CSS.substitute(values)
    return css

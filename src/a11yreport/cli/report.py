"""a11yreport - Render an accessibility report from a stored scan record.

Reads one scan (JSON, persistence shape), resolves white-label settings from
the settings file and command-line overrides, and writes standalone HTML.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from ..core.branding import resolve_white_label_config
from ..core.config import get_effective_config, load_stored_settings
from ..core.images import fetch_images_as_data_urls
from ..core.transform import transform_scan_to_report
from ..formatters.html import render_report_html
from ..models.branding import ResolvedWhiteLabel

console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("a11yreport")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=console, show_path=False, markup=False))


def load_scan_record(path: Path) -> dict:
    try:
        return json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read scan record {path.name}: {e}") from e


async def embed_images(resolved: ResolvedWhiteLabel) -> ResolvedWhiteLabel:
    """Inline the logo and favicon as data URLs. Failed fetches drop the image."""
    logo, favicon = await fetch_images_as_data_urls(
        [resolved.white_label_config.logo_url, resolved.favicon_url]
    )
    white_label = resolved.white_label_config.model_copy(update={"logo_url": logo})
    return resolved.model_copy(update={"white_label_config": white_label, "favicon_url": favicon})


@click.command(name="a11yreport")
@click.argument("scan_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write HTML here (default: stdout)")
@click.option("--settings", "-s", type=click.Path(dir_okay=False, path_type=Path), help="YAML settings file")
@click.option("--logo", type=str, help="Logo URL override")
@click.option("--color", type=str, help="Primary colour override (#RRGGBB)")
@click.option("--company", type=str, help="Company name override")
@click.option("--branding", type=click.Choice(["true", "false"]), help="Show or hide product branding")
@click.option("--favicon", type=str, help="Favicon URL override")
@click.option("--report-style", type=click.Choice(["premium", "corporate"]))
@click.option("--cta-url", type=str, help="Call-to-action link")
@click.option("--cta-text", type=str, help="Call-to-action label")
@click.option("--support-email", type=str)
@click.option("--engine-version", type=str, help="Scanner engine version shown in the report")
@click.option("--embed-logo", is_flag=True, help="Fetch the logo and favicon and inline them as data URLs")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def report_cli(
    scan_json: Path,
    output: Optional[Path],
    settings: Optional[Path],
    logo: Optional[str],
    color: Optional[str],
    company: Optional[str],
    branding: Optional[str],
    favicon: Optional[str],
    report_style: Optional[str],
    cta_url: Optional[str],
    cta_text: Optional[str],
    support_email: Optional[str],
    engine_version: Optional[str],
    embed_logo: bool,
    verbose: bool,
) -> None:
    """Render SCAN_JSON as a white-labelable accessibility report."""
    configure_logging(verbose)

    cli_overrides = {"report": {"engine_version": engine_version}} if engine_version else None
    config = get_effective_config(settings_path=settings, cli_overrides=cli_overrides)
    report_config = config["report"]
    try:
        pages_analyzed = int(report_config.get("pages_analyzed", 1))
    except (TypeError, ValueError):
        raise click.ClickException(
            f"Invalid pages_analyzed setting: {report_config.get('pages_analyzed')!r}"
        ) from None

    query = {
        "logo": logo,
        "color": color,
        "company": company,
        "branding": branding,
        "favicon": favicon,
        "report_style": report_style,
        "cta_url": cta_url,
        "cta_text": cta_text,
        "support_email": support_email,
    }
    resolved = resolve_white_label_config(
        {k: v for k, v in query.items() if v is not None},
        load_stored_settings(config),
    )
    if embed_logo:
        resolved = asyncio.run(embed_images(resolved))

    record = load_scan_record(scan_json)
    try:
        data = transform_scan_to_report(
            record,
            resolved,
            engine_name=str(report_config.get("engine_name", "axe-core")),
            engine_version=str(report_config.get("engine_version", "")),
            pages_analyzed=pages_analyzed,
        )
    except ValidationError as e:
        console.print(f"  [red]ERROR[/red] Invalid scan record ({e.error_count()} validation errors)")
        sys.exit(1)

    html = render_report_html(data)
    if output is None:
        click.echo(html, nl=False)
        return

    output.write_text(html, encoding="utf-8")
    console.print(
        f"  [green]OK[/green] {data.domain}: score {data.health_score.value}/100 "
        f"(Grade {data.health_score.grade}), {len(data.findings)} findings -> {output}"
    )


def main() -> None:
    report_cli()


if __name__ == "__main__":
    main()

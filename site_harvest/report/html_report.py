# File: site_harvest/report/html_report.py
"""site_harvest.report.html_report: HTML-сводка обхода (Jinja2)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_harvest.aggregator import CrawlReport

TEMPLATE_NAME = "report.html.j2"
DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def page_rows(report: CrawlReport) -> List[Dict[str, Any]]:
    """Строки таблицы: по одной на страницу, в порядке обхода."""
    rows = []
    for page in report.pages:
        internal = [link for link in page.links if link.startswith(report.seed_url)]
        rows.append(
            {
                "url": page.url,
                "links": len(page.links),
                "internal": len(set(internal)),
                "images": len(page.images),
                "text_chars": len(page.text_content),
            }
        )
    return rows


def _environment(template_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_html(
    report: CrawlReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Сохраняет HTML-сводку обхода.

    Args:
        report: итог обхода.
        output_path: путь к HTML-файлу; каталоги создаются при необходимости.
        template_dir: свой каталог с ``report.html.j2`` вместо встроенного.
    """
    template = _environment(Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR).get_template(
        TEMPLATE_NAME
    )
    html = template.render(
        seed_url=report.seed_url,
        rows=page_rows(report),
        failed=report.failed,
        visited=report.visited,
        elapsed=report.elapsed,
        deadline_hit=report.deadline_hit,
    )
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html, encoding="utf-8")
    return output_path

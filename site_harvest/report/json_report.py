# site_harvest/report/json_report.py

"""
Запись JSON-результатов SiteHarvest.

Имена файлов выводятся из входных параметров детерминированно:

* обход ``https://example.com/blog`` → ``example.com_blog.json`` и
  ``filtered_example.com_blog.json``;
* типизированный парсинг → ``scraped_<type>_<offset>_<limit>.json``.
"""
import json
import re
from pathlib import Path
from typing import Any, Sequence

from site_harvest.crawler.models import PageRecord

_SCHEME_RE = re.compile(r"^https?://")


def crawl_file_name(seed_url: str) -> str:
    """Имя файла обхода: URL без схемы, ``/`` заменены на ``_``."""
    return _SCHEME_RE.sub("", seed_url).replace("/", "_") + ".json"


def filtered_file_name(seed_url: str) -> str:
    return "filtered_" + crawl_file_name(seed_url)


def scrape_file_name(website_type: str, offset: int, limit: int) -> str:
    return f"scraped_{website_type}_{offset}_{limit}.json"


def write_json(data: Any, output_path: Path | str) -> Path:
    """
    Сохраняет data в JSON по указанному пути (UTF-8, отступ 2).

    :param data: сериализуемые данные
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output


def render_crawl(records: Sequence[PageRecord], seed_url: str, output_dir: Path | str) -> Path:
    """Сохраняет массив записей обхода в порядке посещения."""
    return write_json(
        [r.to_dict() for r in records], Path(output_dir) / crawl_file_name(seed_url)
    )


def render_filtered(records: Sequence[PageRecord], seed_url: str, output_dir: Path | str) -> Path:
    """Сохраняет отфильтрованные записи: одну запись объектом, несколько массивом."""
    if len(records) == 1:
        data: Any = records[0].to_dict()
    else:
        data = [r.to_dict() for r in records]
    return write_json(data, Path(output_dir) / filtered_file_name(seed_url))


def render_scrape(result: dict, output_dir: Path | str) -> Path:
    """Сохраняет результат типизированного парсинга."""
    pagination = result["pagination"]
    name = scrape_file_name(result["websiteType"], pagination["offset"], pagination["limit"])
    return write_json(result, Path(output_dir) / name)

# File: site_harvest/aggregator.py
"""site_harvest.aggregator: Сборка итогов обхода и очистка записей страниц."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Sequence, TypeVar

from site_harvest.crawler.context import CrawlContext
from site_harvest.crawler.models import PageRecord

__all__ = [
    "CrawlReport",
    "aggregate_results",
    "collapse_whitespace",
    "dedupe",
    "filter_record",
    "filter_results",
]

_WS_RE = re.compile(r"\s+")

_T = TypeVar("_T")


def dedupe(items: Iterable[_T]) -> List[_T]:
    """Удаляет дубликаты, сохраняя порядок первого появления."""
    return list(dict.fromkeys(items))


def collapse_whitespace(text: str) -> str:
    """Схлопывает любые последовательности пробельных символов в один пробел."""
    return _WS_RE.sub(" ", text).strip()


def filter_record(record: PageRecord) -> PageRecord:
    """Очищенная копия записи: уникальные ссылки и картинки, нормализованный текст."""
    return replace(
        record,
        links=tuple(dedupe(record.links)),
        images=tuple(dedupe(record.images)),
        text_content=collapse_whitespace(record.text_content),
    )


def filter_results(records: Sequence[PageRecord], *, first_only: bool = True) -> List[PageRecord]:
    """Фильтрует первую запись обхода (или все, если ``first_only=False``)."""
    selected = records[:1] if first_only else records
    return [filter_record(r) for r in selected]


@dataclass(slots=True)
class CrawlReport:
    """Итог обхода: страницы в порядке посещения и служебная статистика."""

    seed_url: str
    pages: List[PageRecord] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    visited: int = 0
    elapsed: float = 0.0
    deadline_hit: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seedUrl": self.seed_url,
            "pages": [p.to_dict() for p in self.pages],
            "failed": list(self.failed),
            "visited": self.visited,
            "elapsed": round(self.elapsed, 3),
            "deadlineHit": self.deadline_hit,
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(context: CrawlContext) -> CrawlReport:
    """Собирает CrawlReport из состояния завершённого обхода."""
    return CrawlReport(
        seed_url=context.scope,
        pages=list(context.results),
        failed=list(context.failed),
        visited=len(context.visited),
        elapsed=context.deadline.elapsed(),
        deadline_hit=context.deadline_hit,
    )

# scrape_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта ScrapeScout.

Сериализация списка PageResult: dataclasses -> dict -> JSON.
"""
import json
from typing import Sequence

from scrape_scout.crawler.models import PageResult


def format_json(results: Sequence[PageResult]) -> str:
    """
    Возвращает JSON-массив (отступ 2, Unicode без экранирования), один объект на страницу.

    Пустые tables / code_blocks / custom_selectors и отсутствующие
    metadata / depth в объект не попадают (см. PageResult.to_dict).

    Пример:
    ```python
    from scrape_scout.report.json_report import format_json
    Path('reports/report.json').write_text(format_json(pages), encoding='utf-8')
    ```
    """
    return json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2)

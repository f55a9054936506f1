"""Shared fixtures: synthetic NAR monthly schedule pages."""

from typing import Callable, Optional
from unittest.mock import Mock

import pytest
import requests


def _select(name: str, values: list[int], selected: Optional[int]) -> str:
    options = "".join(
        f'<option value="{v}"{" selected" if v == selected else ""}>{v}</option>'
        for v in values
    )
    return f'<select name="{name}">{options}</select>'


def _row(row: dict) -> str:
    cells = []
    if "region" in row:
        rowspan = row.get("rowspan", 1)
        cells.append(f'<td class="dbtitle" rowspan="{rowspan}">{row["region"]}</td>')
    cells.append(f'<td class="dbitem">\n{row["name"]}\n</td>')
    cells.extend(f'<td class="dbdata">\n{glyph}\n</td>' for glyph in row["cells"])
    return "<tr>" + "".join(cells) + "</tr>"


def build_page(
    year: Optional[int],
    month: Optional[int],
    rows: list[dict],
    with_table: bool = True,
) -> str:
    """Render a page shaped like the NAR monthly calendar.

    Each row dict has "name" and "cells" (one glyph per day) and may have
    "region" and "rowspan" for the leading merged cell.
    """
    header_days = "".join(f'<td class="dbhead">{d}</td>' for d in range(1, 32))
    table = ""
    if with_table:
        body = "".join(_row(row) for row in rows)
        table = (
            '<table><tr><td class="dbtbl">'
            f'<table><tr><td></td><td></td>{header_days}</tr>{body}</table>'
            '</td></tr></table>'
        )
    return (
        '<html><head><meta charset="utf-8"><title>開催日程</title></head><body>'
        '<form>'
        f'{_select("k_year", [2022, 2023, 2024, 2025], year)}'
        f'{_select("k_month", list(range(1, 13)), month)}'
        '</form>'
        f'{table}'
        '</body></html>'
    )


@pytest.fixture
def month_page() -> Callable[..., str]:
    return build_page


@pytest.fixture
def fake_session() -> Callable[..., Mock]:
    """Build a mock requests.Session serving one page per requested month."""

    def factory(pages: dict[int, str], fail_month: Optional[int] = None) -> Mock:
        def get(url: str, timeout: float) -> Mock:
            month = int(url.rsplit("k_month=", 1)[1])
            response = Mock()
            response.content = pages[month].encode("utf-8")
            if month == fail_month:
                response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
            else:
                response.raise_for_status.return_value = None
            return response

        session = Mock(spec=requests.Session)
        session.get.side_effect = get
        return session

    return factory

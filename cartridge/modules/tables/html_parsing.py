"""
HTML parsing helpers for rendered roll tables.

Contains the helpers that depend on BeautifulSoup. Row resolution itself
works on plain row keys and lives in resolver.py.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from cartridge.models.result import RollTable
from cartridge.modules.tables.resolver import find_die_size


def row_keys_from_table(table: Tag) -> list[str]:
    """
    First-cell texts of the data rows of a rendered table.

    Rows inside <thead> are skipped. A table without a <tbody> is read as
    every row that has at least one <td>.
    """
    body = table.find("tbody")
    if body is not None:
        rows = body.find_all("tr")
    else:
        rows = [row for row in table.find_all("tr") if row.find("td")]

    keys: list[str] = []
    for row in rows:
        cell = row.find(["td", "th"])
        keys.append(cell.get_text(strip=True) if cell else "")
    return keys


def row_keys_from_html(table_html: str) -> list[str]:
    table = BeautifulSoup(table_html, "html.parser").find("table")
    if table is None:
        return []
    return row_keys_from_table(table)


def find_roll_tables(soup: BeautifulSoup) -> list[RollTable]:
    """
    Every roll-table container in an enhanced fragment, in document order.

    Containers missing their button, their table wrapper or a die size
    are ignored.
    """
    tables: list[RollTable] = []
    for container in soup.find_all("div", class_="rollable-table-container"):
        button = container.find("button", class_="roll-table-button")
        wrapper = container.find("div", class_="rollable-table")
        if button is None or wrapper is None:
            continue
        die_size = find_die_size(button.get("data-dice", ""))
        table_id = button.get("data-table-id")
        if die_size is None or not table_id:
            continue
        tables.append(
            RollTable(
                table_id=table_id,
                die_size=die_size,
                row_keys=row_keys_from_table(wrapper),
            )
        )
    return tables

"""Rikishi.aspx HTML parser."""

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag

from rikishidata.fields import extract_field
from rikishidata.models import RikishiRecord
from rikishidata.util import AttributeMissingError, ParseError, TableNotFoundError

logger = logging.getLogger(__name__)

DETAIL_TABLE_CLASS = "rikishidata"
SUMMARY_TABLE_CLASS = "rikishi"


@dataclass
class RikishiTables:
    detail: Tag | None = None
    summary: Tag | None = None  # basho history, not parsed


def parse_rikishi_page(html: str, rid: int) -> RikishiRecord:
    """Parse a Rikishi page and return its RikishiRecord."""
    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Unparsable rikishi page rikishi({rid}): {e}") from e

    table = locate_detail_table(soup, rid=rid)
    record = walk_rows(table, rid)
    logger.info(
        "Parsed rikishi %d: shikona=%s heya=%s highest_rank=%s",
        rid, record.shikona, record.heya, record.highest_rank,
    )
    return record


def locate_tables(root: Tag, strict: bool = False) -> RikishiTables:
    """Find the profile detail table and the summary table.

    The page nests the real ``rikishidata`` table alone inside a cell, while a
    decoy with the same class sits next to other elements. Only a table with
    no siblings is taken as the detail table; if several qualify the last one
    in document order wins.

    A table without a class attribute is skipped, or raises
    AttributeMissingError when ``strict`` is set.
    """
    tables = RikishiTables()
    candidates = 0

    for table in root.find_all("table"):
        classes = table.get("class")
        if classes is None:
            if strict:
                raise AttributeMissingError("table element has no class attribute")
            continue

        if classes == [DETAIL_TABLE_CLASS]:
            if _is_isolated(table):
                tables.detail = table
                candidates += 1
            else:
                logger.debug("Skipping %s table with siblings", DETAIL_TABLE_CLASS)
        elif classes == [SUMMARY_TABLE_CLASS]:
            tables.summary = table

    if candidates > 1:
        logger.warning(
            "Found %d isolated %s tables, using the last one",
            candidates, DETAIL_TABLE_CLASS,
        )
    return tables


def locate_detail_table(
    root: Tag, strict: bool = False, rid: int | None = None,
) -> Tag:
    table = locate_tables(root, strict=strict).detail
    if table is None:
        message = f"no isolated {DETAIL_TABLE_CLASS} table found"
        if rid is not None:
            message = f"{message} rikishi({rid})"
        raise TableNotFoundError(message)
    return table


def walk_rows(table: Tag | None, rid: int) -> RikishiRecord:
    """Feed each (label, value) row of the detail table to extract_field.

    Rows lacking a label or value text are skipped. The first field error
    aborts the walk; duplicate labels are last-write-wins.
    """
    if table is None:
        raise TableNotFoundError(f"rikishidata table is missing rikishi({rid})")

    body = table.find("tbody", recursive=False) or table
    updates: dict = {}

    for tr in body.find_all("tr", recursive=False):
        cells = tr.find_all("td", recursive=False)
        if len(cells) < 3:
            continue

        label = _first_text(cells[1])
        value = _first_text(cells[2])
        if label is None or value is None:
            logger.debug("Skipping row without text cells: %s", tr)
            continue

        label = label.strip()
        update = extract_field(label, value, rid=rid)
        if update:
            logger.debug("rikishi %d: %s -> %s", rid, label, update)
        else:
            logger.debug("rikishi %d: ignoring unknown row %r", rid, label)
        updates.update(update)

    return RikishiRecord(rid=rid, **updates)


def _is_isolated(node: Tag) -> bool:
    """True if ``node`` has no sibling other than whitespace text."""
    for siblings in (node.previous_siblings, node.next_siblings):
        for sibling in siblings:
            if isinstance(sibling, NavigableString) and not sibling.strip():
                continue
            return False
    return True


def _first_text(cell: Tag) -> str | None:
    """Text of the first direct text child of ``cell``.

    Comments, CDATA and other NavigableString subclasses are not text.
    """
    for child in cell.children:
        if type(child) is NavigableString:
            return str(child)
    return None

"""
Build Recipe records from the rows of the codex recipe table (`aaData`).

A row is positional:
    [id, icon, name, process, mastery, exp, materials, products]
where most cells are HTML snippets.
"""
import logging
from typing import List, NamedTuple, Optional, Sequence
from urllib.parse import urlparse

from recipewatch.fragment import Fragment
from recipewatch.items import ItemResolver
from recipewatch.models import Item, Mastery, Recipe
from recipewatch.text import Number, parse_number, substr_between

logger = logging.getLogger(__name__)

ROW_FIELDS = 8
HTML_CELLS = (1, 2, 6, 7)
ENTRY = ".iconset_wrapper_medium"


class ItemRef(NamedTuple):
    locale: str
    type: str
    id: str


def decompose_url(url: str) -> ItemRef:
    """'/us/item/9213/' -> ItemRef('us', 'item', '9213')"""
    parts = [p for p in urlparse(url).path.split("/") if p]
    parts += [""] * (2 - len(parts))
    return ItemRef(parts[0], parts[1], "/".join(parts[2:]))


def recipe_id(row: Sequence) -> str:
    cell = row[0]
    if isinstance(cell, dict):
        cell = cell.get("display")
    return "" if cell is None else str(cell)


def recipe_name(row: Sequence) -> str:
    frag = Fragment(row[2])
    return frag.text("b") or frag.text("a")


def recipe_icon(row: Sequence) -> str:
    # the cell holds an escaped <img> tag as text, not an element
    return substr_between(Fragment(row[1]).text("div"), 'src="', '"')


def recipe_grade(row: Sequence) -> Number:
    return parse_number(substr_between(row[2] or "", "item_grade_", " "))


def recipe_mastery(row: Sequence) -> Optional[Mastery]:
    cell = row[4]
    text = cell.get("display") if isinstance(cell, dict) else None
    if not text:
        return None
    args = str(text).split(" ")
    level = parse_number(args.pop())
    return Mastery(" ".join(args), level)


def build_items(markup: str, resolver: ItemResolver) -> Optional[List[Item]]:
    """Items of a materials/products cell, or None if an entry has no link."""
    out = []
    for entry in Fragment(markup, wrap=True).select(ENTRY):
        link = entry.first("a[href]")
        if link is None or not link.node["href"]:
            return None
        ref = decompose_url(link.node["href"])
        details = resolver.resolve(ref.type, ref.id)
        out.append(Item(
            id=ref.id,
            name=details.name,
            grade=details.grade,
            type=ref.type,
            icon=substr_between(entry.text(".icon_wrapper"), 'src="', '"'),
            amount=parse_number(entry.text(".quantity_small"), 1),
        ))
    return out


def build_recipe(row: Sequence, resolver: ItemResolver) -> Optional[Recipe]:
    """One Recipe per table row; None when the row can't make one."""
    if not isinstance(row, (list, tuple)) or len(row) < ROW_FIELDS:
        logger.warning("skipping malformed row: %r", row)
        return None
    bad = [i for i in HTML_CELLS if row[i] is not None and not isinstance(row[i], str)]
    if bad:
        logger.warning("skipping row with non-text cells %s: %r", bad, row[:3])
        return None

    rid = recipe_id(row)
    if not rid:
        logger.warning("skipping row without id: %r", row[:3])
        return None

    materials = build_items(row[6], resolver)
    if not materials:
        logger.info("dropping recipe %s: unresolvable materials", rid)
        return None
    products = build_items(row[7], resolver)
    if products is None:
        logger.info("dropping recipe %s: unresolvable products", rid)
        return None

    return Recipe(
        id=rid,
        name=recipe_name(row),
        icon=recipe_icon(row),
        grade=recipe_grade(row),
        process="" if row[3] is None else str(row[3]),
        mastery=recipe_mastery(row),
        exp=parse_number(row[5]),
        materials=tuple(materials),
        products=tuple(products),
    )

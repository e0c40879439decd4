"""
Read-only CSS queries over loose HTML snippets (table cells, tooltips).
"""
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag


class Fragment:
    """A parsed snippet, or a view on one element inside it.

    Args:
        markup: HTML text or an already parsed element
        wrap: put the markup inside a <div> first, so sibling nodes at
            the top level share one parent
    """

    def __init__(self, markup: Union[str, Tag, None], wrap: bool = False):
        if isinstance(markup, Tag):
            self.node = markup
            self.raw = str(markup)
            return
        self.raw = markup or ""
        html = f"<div>{self.raw}</div>" if wrap else self.raw
        self.node = BeautifulSoup(html, "html.parser")

    def select(self, selector: str) -> List["Fragment"]:
        return [Fragment(el) for el in self.node.select(selector)]

    def first(self, selector: str) -> Optional["Fragment"]:
        el = self.node.select_one(selector)
        return Fragment(el) if el is not None else None

    def text(self, selector: Optional[str] = None) -> str:
        """Stripped text of the first match ("" when nothing matches)."""
        if selector is None:
            return self.node.get_text().strip()
        el = self.node.select_one(selector)
        return el.get_text().strip() if el is not None else ""

    def attr(self, selector: str, name: str) -> Optional[str]:
        el = self.node.select_one(selector)
        if el is None:
            return None
        value = el.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return value

    def __repr__(self):
        return f"Fragment({self.raw[:40]!r})"

"""
Item lookups against the codex tooltip page.

One ItemResolver is meant to live for one run: every (type, id) pair is
fetched once and shared between all recipes that reference it.
"""
import logging
import threading
from concurrent.futures import Future
from typing import Callable, Dict, NamedTuple, Tuple

from recipewatch import client
from recipewatch.config import config
from recipewatch.fragment import Fragment
from recipewatch.text import Number, parse_number, substr_between

logger = logging.getLogger(__name__)


class ItemDetails(NamedTuple):
    name: str
    grade: Number


def parse_tip(html: str) -> ItemDetails:
    """Name is the first <b>; grade comes from the item_grade_<N> class."""
    name = Fragment(html).text("b")
    grade = parse_number(substr_between(html, "item_grade_", " "))
    return ItemDetails(name, grade)


class ItemResolver:
    def __init__(self, fetch: Callable[[str], str] = client.fetch_text,
                 base_url: str = config.BASE_URL):
        self.fetch = fetch
        self.base_url = base_url
        self.requests_made = 0
        self._lock = threading.Lock()
        self._cache: Dict[Tuple[str, str], Future] = {}

    def resolve(self, item_type: str, item_id: str) -> ItemDetails:
        key = (item_type, item_id)
        with self._lock:
            pending = self._cache.get(key)
            owner = pending is None
            if owner:
                pending = self._cache[key] = Future()
                self.requests_made += 1
        if not owner:
            return pending.result()

        try:
            html = self.fetch(client.tip_url(item_type, item_id, self.base_url))
            details = parse_tip(html)
        except BaseException as e:
            pending.set_exception(e)
            raise
        logger.debug("resolved %s--%s: %s (grade %s)", item_type, item_id, details.name, details.grade)
        pending.set_result(details)
        return details

"""
Per-category check: fetch the published baseline and the live codex table,
build the recipes, and mail the new list when unknown ids show up.
"""
import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from recipewatch import client
from recipewatch.config import config
from recipewatch.errors import SourceFormatError
from recipewatch.items import ItemResolver
from recipewatch.models import Recipe
from recipewatch.recipes import build_recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    name: str
    label: str
    source_type: str

    @property
    def baseline_url(self) -> str:
        return client.baseline_url(self.name)

    @property
    def source_url(self) -> str:
        return client.recipes_url(self.source_type)


COOKING = Category("cooking", "Cooking", "culinary")
ALCHEMY = Category("alchemy", "Alchemy", "alchemy")
CATEGORIES = {c.name: c for c in (COOKING, ALCHEMY)}


class Outcome(enum.Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class CategoryResult:
    category: Category
    outcome: Outcome
    recipes: List[Recipe] = field(default_factory=list)
    new_ids: List[str] = field(default_factory=list)


def baseline_ids(baseline) -> set:
    if not isinstance(baseline, list):
        raise SourceFormatError(f"baseline is {type(baseline).__name__}, expected a list")
    return {str(r["id"]) for r in baseline if isinstance(r, dict) and "id" in r}


def source_rows(payload) -> list:
    rows = payload.get("aaData") if isinstance(payload, dict) else None
    if not isinstance(rows, list):
        raise SourceFormatError("recipe table has no aaData list")
    return rows


def find_new_ids(known: set, recipes: Iterable[Recipe]) -> List[str]:
    return [r.id for r in recipes if r.id not in known]


def build_recipes(rows: Sequence, resolver: ItemResolver, workers: int = config.MAX_WORKERS) -> List[Recipe]:
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="recipe") as pool:
        built = pool.map(lambda row: build_recipe(row, resolver), rows)
        return [r for r in built if r is not None]


def check_category(category: Category, notifier, *,
                   fetch_text: Callable[[str], str] = client.fetch_text,
                   fetch_json: Callable[[str], object] = client.fetch_json,
                   resolver: Optional[ItemResolver] = None,
                   workers: int = config.MAX_WORKERS) -> CategoryResult:
    """Run one category end to end. Errors propagate to the caller."""
    resolver = resolver or ItemResolver(fetch_text)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix=category.name) as pool:
        baseline_f = pool.submit(fetch_json, category.baseline_url)
        source_f = pool.submit(fetch_json, category.source_url)
        known = baseline_ids(baseline_f.result())
        rows = source_rows(source_f.result())

    recipes = build_recipes(rows, resolver, workers)
    logger.info("%s: %d rows, %d recipes, %d item lookups",
                category.name, len(rows), len(recipes), resolver.requests_made)

    new_ids = find_new_ids(known, recipes)
    if not new_ids:
        logger.info("no new %s recipes", category.name)
        return CategoryResult(category, Outcome.UNCHANGED, recipes)

    logger.info("%d new %s recipes: %s", len(new_ids), category.name, ", ".join(new_ids))
    text = f"Updated {category.label} Recipes\n\nNew recipe ids: {', '.join(new_ids)}"
    notifier.send(text, [r.to_dict() for r in recipes], category.name)
    return CategoryResult(category, Outcome.UPDATED, recipes, new_ids)


def run(categories: Iterable[Category], notifier, **kwargs) -> Dict[str, CategoryResult]:
    """Check each category in turn; one failing category doesn't stop the rest."""
    results = {}
    for category in categories:
        try:
            results[category.name] = check_category(category, notifier, **kwargs)
        except Exception:
            logger.exception("%s check failed", category.name)
            results[category.name] = CategoryResult(category, Outcome.FAILED)
    return results

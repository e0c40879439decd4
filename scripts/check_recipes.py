"""
Check bdocodex for cooking/alchemy recipes missing from the published
snapshot and mail the fresh list when there are any.

    python scripts/check_recipes.py                  # both categories
    python scripts/check_recipes.py -c alchemy --dry-run --output public
"""
import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from recipewatch.config import config
from recipewatch.notify import EmailNotifier, LogNotifier
from recipewatch.pipeline import CATEGORIES, Outcome, run

logger = logging.getLogger(__name__)


def write_recipes(out_dir: Path, name: str, recipes) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{name}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump([r.to_dict() for r in recipes], f, ensure_ascii=False, indent=2)
    return path


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mail an alert when new recipes show up on bdocodex")
    parser.add_argument("-c", "--category", action="append", choices=sorted(CATEGORIES),
                        help="category to check (repeatable, default: all)")
    parser.add_argument("--dry-run", action="store_true", help="log instead of sending mail")
    parser.add_argument("--output", type=Path, help="also write <category>.json files here")
    parser.add_argument("--workers", type=positive_int, default=config.MAX_WORKERS,
                        help=f"concurrent row builds (default: {config.MAX_WORKERS})")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - [%(threadName)s] - %(levelname)s - %(message)s",
    )

    names = args.category or ["cooking", "alchemy"]
    notifier = LogNotifier() if args.dry_run else EmailNotifier()
    results = run([CATEGORIES[n] for n in names], notifier, workers=args.workers)

    for name, result in results.items():
        if args.output and result.outcome is not Outcome.FAILED:
            logger.info("Wrote %s", write_recipes(args.output, name, result.recipes))
        logger.info("%s: %s", name, result.outcome.value)

    return 1 if any(r.outcome is Outcome.FAILED for r in results.values()) else 0


if __name__ == "__main__":
    sys.exit(main())

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from recipewatch.errors import SourceFormatError
from recipewatch.items import ItemResolver
from recipewatch.pipeline import ALCHEMY, COOKING, Outcome, check_category, find_new_ids, run

from samples import BASE, FakeSite, RecordingNotifier, entry, row


def site_for(baseline, rows, category=COOKING, **extra):
    pages = {
        category.baseline_url: baseline,
        category.source_url: {"aaData": rows},
    }
    pages.update(extra)
    return FakeSite(pages)


class CheckCategoryTests(unittest.TestCase):
    def check(self, site, category=COOKING):
        self.notifier = RecordingNotifier()
        return check_category(
            category, self.notifier,
            fetch_text=site.fetch_text,
            fetch_json=site.fetch_json,
            resolver=ItemResolver(site.fetch_text, BASE),
            workers=4,
        )

    def test_same_ids_send_nothing(self):
        site = site_for([{"id": "1"}, {"id": "2"}], [row("1"), row("2")])
        result = self.check(site)

        self.assertIs(result.outcome, Outcome.UNCHANGED)
        self.assertEqual([r.id for r in result.recipes], ["1", "2"])
        self.assertEqual(self.notifier.sent, [])

    def test_new_id_sends_full_list(self):
        site = site_for([{"id": "1"}, {"id": "2"}], [row("1"), row("3")])
        result = self.check(site)

        self.assertIs(result.outcome, Outcome.UPDATED)
        self.assertEqual(result.new_ids, ["3"])
        self.assertEqual(len(self.notifier.sent), 1)
        text, recipes, filename = self.notifier.sent[0]
        self.assertEqual(filename, "cooking")
        self.assertTrue(text.startswith("Updated Cooking Recipes"))
        self.assertEqual(recipes, [r.to_dict() for r in result.recipes])
        self.assertEqual([r["id"] for r in recipes], ["1", "3"])

    def test_dropped_rows_do_not_count_as_new(self):
        broken = row("9", materials=entry(None, "/icons/x.png"))
        site = site_for([{"id": "1"}], [row("1"), broken])
        result = self.check(site)

        self.assertIs(result.outcome, Outcome.UNCHANGED)
        self.assertEqual([r.id for r in result.recipes], ["1"])

    def test_bad_row_is_skipped_not_fatal(self):
        bad = row("2")
        bad[2] = 12345
        site = site_for([{"id": "1"}], [row("1"), bad])
        result = self.check(site)

        self.assertIs(result.outcome, Outcome.UNCHANGED)
        self.assertEqual([r.id for r in result.recipes], ["1"])

    def test_row_order_is_kept(self):
        ids = [str(i) for i in range(20, 0, -1)]
        site = site_for([], [row(i) for i in ids])
        result = self.check(site)
        self.assertEqual([r.id for r in result.recipes], ids)

    def test_bad_payloads(self):
        with self.assertRaises(SourceFormatError):
            self.check(FakeSite({COOKING.baseline_url: {"id": "1"}, COOKING.source_url: {"aaData": []}}))
        with self.assertRaises(SourceFormatError):
            self.check(FakeSite({COOKING.baseline_url: [], COOKING.source_url: {"rows": []}}))

    def test_find_new_ids(self):
        site = site_for([], [row("1"), row("2")])
        recipes = self.check(site).recipes
        self.assertEqual(find_new_ids({"1"}, recipes), ["2"])


class RunTests(unittest.TestCase):
    def test_failing_category_does_not_stop_the_next(self):
        # cooking's source url is missing, so its fetch raises
        site = FakeSite({
            COOKING.baseline_url: [],
            ALCHEMY.baseline_url: [],
            ALCHEMY.source_url: {"aaData": [row("50")]},
        })
        notifier = RecordingNotifier()

        with self.assertLogs("recipewatch.pipeline", level="ERROR"):
            results = run(
                [COOKING, ALCHEMY], notifier,
                fetch_text=site.fetch_text,
                fetch_json=site.fetch_json,
                resolver=ItemResolver(site.fetch_text, BASE),
            )

        self.assertIs(results["cooking"].outcome, Outcome.FAILED)
        self.assertIs(results["alchemy"].outcome, Outcome.UPDATED)
        self.assertEqual([s[2] for s in notifier.sent], ["alchemy"])

    def test_notification_failure_is_contained(self):
        site = FakeSite({
            COOKING.baseline_url: [],
            COOKING.source_url: {"aaData": [row("1")]},
            ALCHEMY.baseline_url: [{"id": "50"}],
            ALCHEMY.source_url: {"aaData": [row("50")]},
        })

        class BrokenNotifier:
            def send(self, text, recipes, filename):
                raise OSError("smtp down")

        with self.assertLogs("recipewatch.pipeline", level="ERROR"):
            results = run([COOKING, ALCHEMY], BrokenNotifier(),
                          fetch_text=site.fetch_text, fetch_json=site.fetch_json,
                          resolver=ItemResolver(site.fetch_text, BASE))

        self.assertIs(results["cooking"].outcome, Outcome.FAILED)
        self.assertIs(results["alchemy"].outcome, Outcome.UNCHANGED)


if __name__ == "__main__":
    unittest.main()

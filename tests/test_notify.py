import json
import smtplib
import sys
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).parent.parent))

from recipewatch.errors import NotificationError
from recipewatch.notify import EmailNotifier, build_message

RECIPES = [{"id": "1", "name": "Cron Meal ★", "materials": []}]


class BuildMessageTests(unittest.TestCase):
    def test_json_attachment(self):
        content = json.dumps(RECIPES, ensure_ascii=False)
        msg = build_message("Updated Cooking Recipes", content, "cooking", "a@x.test", "b@x.test")

        self.assertEqual(msg["Subject"], "Recipe Alert")
        self.assertEqual(msg["From"], "a@x.test")
        self.assertEqual(msg["To"], "b@x.test")
        self.assertIn("Updated Cooking Recipes", msg.get_body(("plain",)).get_content())

        [attachment] = list(msg.iter_attachments())
        self.assertEqual(attachment.get_filename(), "cooking.json")
        self.assertEqual(attachment.get_content_type(), "application/json")
        self.assertEqual(attachment["Content-Transfer-Encoding"], "base64")
        self.assertEqual(json.loads(attachment.get_content().decode("utf-8")), RECIPES)


class EmailNotifierTests(unittest.TestCase):
    def notifier(self, **kw):
        return EmailNotifier(host="smtp.x.test", port=465, user="u", password="p",
                             sender="a@x.test", to="b@x.test", **kw)

    @mock.patch("recipewatch.notify.smtplib.SMTP_SSL")
    def test_send_over_ssl(self, smtp_ssl):
        self.notifier().send("hello", RECIPES, "alchemy")

        smtp = smtp_ssl.return_value.__enter__.return_value
        smtp.login.assert_called_once_with("u", "p")
        msg = smtp.send_message.call_args[0][0]
        [attachment] = list(msg.iter_attachments())
        self.assertEqual(attachment.get_filename(), "alchemy.json")

    @mock.patch("recipewatch.notify.smtplib.SMTP")
    def test_send_with_starttls(self, smtp_cls):
        self.notifier(starttls=True).send("hello", RECIPES, "cooking")

        smtp = smtp_cls.return_value
        smtp.starttls.assert_called_once()
        smtp.__enter__.return_value.send_message.assert_called_once()

    @mock.patch("recipewatch.notify.smtplib.SMTP_SSL")
    def test_smtp_errors_are_wrapped(self, smtp_ssl):
        smtp = smtp_ssl.return_value.__enter__.return_value
        smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

        with self.assertRaises(NotificationError):
            self.notifier().send("hello", RECIPES, "cooking")


if __name__ == "__main__":
    unittest.main()

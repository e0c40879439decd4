"""
Alert mail: a short text plus the full recipe list as <category>.json.
"""
import json
import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import List

from recipewatch.config import config
from recipewatch.errors import NotificationError

logger = logging.getLogger(__name__)

SUBJECT = "Recipe Alert"


def build_message(text: str, content: str, filename: str,
                  sender: str = config.ALERT_FROM, to: str = config.ALERT_TO) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = SUBJECT
    msg["From"] = sender
    msg["To"] = to
    msg.set_content(text)
    # bytes attachments are base64 encoded by the email package
    msg.add_attachment(
        content.encode("utf-8"),
        maintype="application",
        subtype="json",
        filename=f"{filename}.json",
    )
    return msg


class EmailNotifier:
    """Sends alert mails through the SMTP server from the config."""

    def __init__(self, host: str = config.SMTP_HOST, port: int = config.SMTP_PORT,
                 user=config.SMTP_USER, password=config.SMTP_PASSWORD,
                 starttls: bool = config.SMTP_STARTTLS,
                 sender: str = config.ALERT_FROM, to: str = config.ALERT_TO):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.starttls = starttls
        self.sender = sender
        self.to = to

    def send(self, text: str, recipes: List[dict], filename: str) -> None:
        content = json.dumps(recipes, ensure_ascii=False)
        msg = build_message(text, content, filename, self.sender, self.to)
        try:
            with self._connect() as smtp:
                if self.user:
                    smtp.login(self.user, self.password or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"sending {filename}.json alert failed: {e}") from e
        logger.info("email sent to %s with %s.json (%d recipes)", self.to, filename, len(recipes))

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.starttls:
            smtp = smtplib.SMTP(self.host, self.port, timeout=config.HTTP_TIMEOUT)
            smtp.starttls(context=context)
            return smtp
        return smtplib.SMTP_SSL(self.host, self.port, context=context, timeout=config.HTTP_TIMEOUT)


class LogNotifier:
    """Dry-run stand-in: logs what would have been mailed."""

    def send(self, text: str, recipes: List[dict], filename: str) -> None:
        logger.info("dry run, not sending %r with %s.json (%d recipes)", text, filename, len(recipes))

"""
Runtime settings, read from the environment (and a local .env file).
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Settings for the scraper and the alert mail."""

    # source site
    BASE_URL: str = os.getenv('BASE_URL', 'https://bdocodex.com').rstrip('/')
    BASELINE_BASE_URL: str = os.getenv(
        'BASELINE_BASE_URL',
        'https://raw.githubusercontent.com/alancuriel/bdo-recipes/main',
    ).rstrip('/')
    USER_AGENT: str = os.getenv('USER_AGENT', 'recipewatch (personal use)')
    HTTP_TIMEOUT: float = float(os.getenv('HTTP_TIMEOUT', '30'))
    MAX_WORKERS: int = max(1, int(os.getenv('MAX_WORKERS', '8')))

    # alert mail
    SMTP_HOST: str = os.getenv('SMTP_HOST', 'localhost')
    SMTP_PORT: int = int(os.getenv('SMTP_PORT', '465'))
    SMTP_USER: Optional[str] = os.getenv('SMTP_USER')
    SMTP_PASSWORD: Optional[str] = os.getenv('SMTP_PASSWORD')
    SMTP_STARTTLS: bool = os.getenv('SMTP_STARTTLS', '0') == '1'
    ALERT_FROM: str = os.getenv('ALERT_FROM', 'alerts@localhost')
    ALERT_TO: str = os.getenv('ALERT_TO', 'alerts@localhost')


config = Config()

"""
HTTP access to the codex site and the published baseline files.
"""
import json
import logging

import requests

from recipewatch.config import config

logger = logging.getLogger(__name__)

S = requests.Session()
S.headers["User-Agent"] = config.USER_AGENT


def fetch_text(url: str) -> str:
    logger.debug("GET %s", url)
    r = S.get(url, timeout=config.HTTP_TIMEOUT)
    r.raise_for_status()
    return r.text


def fetch_json(url: str):
    # the codex pads its JSON with whitespace
    return json.loads(fetch_text(url).strip())


def recipes_url(source_type: str, base_url: str = config.BASE_URL) -> str:
    return f"{base_url}/query.php?a=recipes&type={source_type}&id=1&l=us"


def tip_url(item_type: str, item_id: str, base_url: str = config.BASE_URL) -> str:
    return f"{base_url}/tip.php?id={item_type}--{item_id}&caphrasenhancement=&l=us&nf=on"


def baseline_url(category: str, base_url: str = config.BASELINE_BASE_URL) -> str:
    return f"{base_url}/{category}.json"

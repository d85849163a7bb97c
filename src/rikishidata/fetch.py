"""HTTP fetch with retry, backoff, sleep, and caching."""

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path

import requests

from rikishidata.models import RikishiRecord
from rikishidata.parse_rikishi import parse_rikishi_page
from rikishidata.util import FetchError

logger = logging.getLogger(__name__)

BASE_URL = "https://sumodb.sumogames.de"
USER_AGENT = "rikishidata/0.1 (+https://github.com/owner/rikishidata)"
SLEEP_MIN = 0.5
SLEEP_MAX = 1.5


@dataclass(frozen=True)
class FetchSettings:
    base_url: str = BASE_URL
    timeout: float = 30  # seconds, per request
    max_retries: int = 3
    backoff_base: float = 1  # seconds: 1, 2, 4
    user_agent: str = USER_AGENT


DEFAULT_SETTINGS = FetchSettings()


def rikishi_url(rid: int, base_url: str = BASE_URL) -> str:
    return f"{base_url}/Rikishi.aspx?r={rid}"


def fetch_page(
    url: str,
    params: dict | None = None,
    settings: FetchSettings = DEFAULT_SETTINGS,
) -> str:
    """Fetch a page with retry and exponential backoff."""
    headers = {"User-Agent": settings.user_agent}
    last_error = None
    for attempt in range(1, settings.max_retries + 1):
        try:
            logger.debug(
                "Fetching %s %s (attempt %d/%d)",
                url, params or "", attempt, settings.max_retries,
            )
            resp = requests.get(
                url, params=params, headers=headers, timeout=settings.timeout,
            )
            if resp.status_code == 200:
                logger.debug("OK %s", url)
                return resp.text
            logger.warning(
                "HTTP %d for %s (attempt %d/%d)",
                resp.status_code, url, attempt, settings.max_retries,
            )
            last_error = FetchError(
                f"HTTP {resp.status_code} for {url}"
            )
        except requests.RequestException as e:
            logger.warning(
                "Connection error for %s (attempt %d/%d): %s",
                url, attempt, settings.max_retries, e,
            )
            last_error = FetchError(f"Connection error for {url}: {e}")

        if attempt < settings.max_retries:
            backoff = settings.backoff_base * (2 ** (attempt - 1))
            logger.debug("Backoff %ss before retry", backoff)
            time.sleep(backoff)

    if last_error is None:
        raise FetchError(f"No attempts made for {url} (max_retries={settings.max_retries})")
    raise last_error


def _page_sleep() -> None:
    """Random sleep between page fetches."""
    delay = random.uniform(SLEEP_MIN, SLEEP_MAX)
    time.sleep(delay)


def fetch_with_cache(
    url: str,
    cache_path: Path | None,
    use_cache: bool,
    params: dict | None = None,
    settings: FetchSettings = DEFAULT_SETTINGS,
) -> str:
    """Fetch a page, optionally using/saving cache."""
    if use_cache and cache_path and cache_path.exists():
        logger.info("Cache hit: %s", cache_path)
        return cache_path.read_text(encoding="utf-8")

    html = fetch_page(url, params=params, settings=settings)
    _page_sleep()

    if use_cache and cache_path:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(html, encoding="utf-8")
        logger.debug("Cached to %s", cache_path)

    return html


def fetch_rikishi(
    rid: int,
    settings: FetchSettings = DEFAULT_SETTINGS,
    cache_path: Path | None = None,
    use_cache: bool = False,
) -> RikishiRecord:
    """Fetch a rikishi profile page and parse it into a RikishiRecord."""
    if rid <= 0:
        raise ValueError(f"rikishi id must be positive, got {rid}")

    url = rikishi_url(rid, settings.base_url)
    logger.info("Fetching rikishi %d: %s", rid, url)
    try:
        html = fetch_with_cache(url, cache_path, use_cache, settings=settings)
    except FetchError as e:
        raise FetchError(f"{e} rikishi({rid})") from e
    return parse_rikishi_page(html, rid)

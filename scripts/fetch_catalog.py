import json
import logging
import os
import sys
import time

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# Allow running as `python scripts/fetch_catalog.py` from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from degree_planner.config import CATALOG_SOURCE_URL, DATA_DIR, RAW_CATALOG_FILE
from degree_planner.logging_setup import configure_logging

logger = logging.getLogger("fetch_catalog")

# --- CONFIGURATION ---
OUTPUT_FILE = DATA_DIR / RAW_CATALOG_FILE
PAGE_SIZE = 200
REQUEST_TIMEOUT = 30
PAGE_DELAY = 1.0          # Seconds between pages, keeps the provider API happy
# ---------------------


# --- SESSION SETUP ---
def create_retry_session():
    session = requests.Session()
    retries = Retry(
        total=5,
        backoff_factor=2,  # Wait 2s, 4s, 8s, 16s... on 429 errors
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"]
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({
        "Accept": "application/json",
        "User-Agent": "degree-planner-catalog-fetch/1.0",
    })
    return session


def extract_rows(payload):
    """
    Provider endpoints return either a bare list or {"courses": [...]}.
    Anything else is treated as an empty page.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return payload.get("courses") or payload.get("results") or []
    return []


def fetch_all(session, source_url, page_size=PAGE_SIZE, delay=PAGE_DELAY):
    """Page through the catalog endpoint until a short page comes back."""
    rows = []
    page = 1
    while True:
        resp = session.get(
            source_url,
            params={"page": page, "per_page": page_size},
            timeout=REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        batch = extract_rows(resp.json())
        rows.extend(batch)
        logger.info("Page %d: %d record(s)", page, len(batch))

        if len(batch) < page_size:
            break
        page += 1
        time.sleep(delay)
    return rows


def run(source_url=CATALOG_SOURCE_URL, output_file=OUTPUT_FILE):
    if not source_url:
        logger.error("CATALOG_SOURCE_URL is not set")
        return 1

    session = create_retry_session()
    logger.info("Fetching raw catalog from %s", source_url)

    try:
        rows = fetch_all(session, source_url)
    except requests.RequestException as e:
        logger.error("Catalog fetch failed: %s", e)
        return 1

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(rows, f, indent=2)

    logger.info("Saved %d raw record(s) to %s", len(rows), output_file)
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(run())

"""Load post JSON from a file, stdin, or an HTTP(S) URL.

Remote documents are fetched with a plain GET; no authentication is added,
so the URL must already be readable, e.g. a saved API response.
"""

import json
import logging
import sys
import time
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "tweet-segments/0.1.0"


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch_document(url: str, timeout: float = DEFAULT_TIMEOUT) -> dict | list:
    """GET ``url`` and decode the JSON body."""
    logger.info("Fetching %s", url)
    with httpx.Client(
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)

    if response.status_code == 429:
        reset_time = response.headers.get("x-rate-limit-reset")
        wait_msg = ""
        if reset_time:
            wait_seconds = int(reset_time) - int(time.time())
            if wait_seconds > 0:
                wait_msg = f" Retry in {wait_seconds}s."
        raise RuntimeError(f"Rate limited by {response.url.host}.{wait_msg}")

    if response.status_code == 404:
        raise RuntimeError(
            f"Document not found (404): {url}\n"
            "Check the URL, or save the JSON locally and pass the file path."
        )

    if response.status_code in (401, 403):
        raise RuntimeError(
            f"Access denied ({response.status_code}): {url}\n"
            "The document must be readable without credentials."
        )

    response.raise_for_status()

    try:
        return response.json()
    except json.JSONDecodeError as e:
        raise ValueError(f"Response from {url} is not JSON: {e}") from e


def load_document(location: str, timeout: float = DEFAULT_TIMEOUT) -> dict | list:
    """Load a JSON document. ``-`` reads stdin."""
    if is_remote(location):
        return fetch_document(location, timeout=timeout)

    if location == "-":
        content = sys.stdin.read()
    else:
        path = Path(location)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        content = path.read_text(encoding="utf-8")

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"{location} is not valid JSON: {e}") from e

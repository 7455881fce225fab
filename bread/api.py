"""
API.Bible passage fetcher.

One blocking GET per passage, no retries:

    GET {API_BASE}/bibles/{bible_id}/passages/{passage_id}
        ?content-type=html&include-verse-numbers=true
        &include-titles=false&include-notes=false
    api-key: <key>
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from .config import RunConfig, __version__
from .model import Passage

PASSAGE_PARAMS: Dict[str, str] = {
    "content-type": "html",
    "include-verse-numbers": "true",
    "include-titles": "false",
    "include-notes": "false",
}


class RetrievalError(Exception):
    """Non-2xx response (or unusable payload) from API.Bible."""

    def __init__(self, status: int, body: str):
        super().__init__(f"API error {status}: {body}")
        self.status = status
        self.body = body


def api_headers(api_key: str) -> Dict[str, str]:
    return {
        "api-key": api_key,
        "Accept": "application/json",
        "User-Agent": f"bread-passages/{__version__}",
    }


def passage_url(config: RunConfig, passage_id: str) -> str:
    return f"{config.base_url}/passages/{passage_id}"


def fetch_passage(
    passage_id: str,
    config: RunConfig,
    session: Optional[Any] = None,
) -> Passage:
    """
    Fetch one passage as HTML.

    Parameters
    ----------
    passage_id:
        API.Bible passage id, e.g. 'ROM.8.1-ROM.8.17'.
    config:
        RunConfig carrying the key, bible id and timeout.
    session:
        Optional requests.Session (or anything with a compatible .get).

    Raises
    ------
    RetrievalError
        Status >= 400, or a payload whose data.content is missing or not a string.
    requests.RequestException
        Transport failure.
    """
    http = session if session is not None else requests
    r = http.get(
        passage_url(config, passage_id),
        headers=api_headers(config.api_key),
        params=PASSAGE_PARAMS,
        timeout=config.timeout,
    )
    if r.status_code >= 400:
        raise RetrievalError(r.status_code, r.text)

    try:
        data = r.json()["data"]
        content = data["content"]
    except (ValueError, KeyError, TypeError) as e:
        raise RetrievalError(r.status_code, f"unexpected payload ({e}): {r.text[:200]}")

    if not isinstance(content, str):
        raise RetrievalError(
            r.status_code,
            f"unexpected payload (content is {type(content).__name__}): {r.text[:200]}",
        )

    copyright_text = data.get("copyright")
    if not isinstance(copyright_text, str):
        copyright_text = ""

    return Passage(content=content, copyright=copyright_text)

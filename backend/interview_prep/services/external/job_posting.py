from __future__ import annotations

import logging
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup  # type: ignore

from ...errors import ValidationError

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

MIN_POSTING_LENGTH = 100
FETCH_FAILED = "Could not fetch job description from URL. Please copy and paste the job description manually."


async def _fetch_html(url: str, timeout: float, client: Optional[httpx.AsyncClient] = None) -> str:
    if client is not None:
        resp = await client.get(url, headers=HEADERS)
        resp.raise_for_status()
        return resp.text
    async with httpx.AsyncClient(timeout=timeout, headers=HEADERS, follow_redirects=True) as owned:
        resp = await owned.get(url)
        resp.raise_for_status()
        return resp.text


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return re.sub(r"\s+", " ", soup.get_text(" ")).strip()


async def fetch_job_description(
    url: str,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Download a job posting and reduce it to plain text. Any fetch problem, or
    a page with too little text to be a posting, is reported as a 400.
    """
    logger.info("Attempting to fetch job description from URL: %s", url)
    try:
        html = await _fetch_html(url, timeout, client)
    except httpx.HTTPError as exc:
        logger.error("Failed to fetch from URL %s: %s", url, exc)
        raise ValidationError(FETCH_FAILED) from exc

    text = html_to_text(html)
    if len(text) < MIN_POSTING_LENGTH:
        logger.error("Insufficient content extracted from %s (%d chars)", url, len(text))
        raise ValidationError(FETCH_FAILED)
    logger.info("Extracted job description from URL, length: %d", len(text))
    return text

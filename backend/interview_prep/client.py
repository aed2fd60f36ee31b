"""
Async client for the PDF preview endpoint.

An editor fires a preview request on every change, so several can be in flight
at once. Only the newest one may update ``latest_pdf``: each call takes a
generation number, cancels the request it supersedes, and drops its own result
if a newer call has started in the meantime.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

PREVIEW_PATH = "/api/resume/generate-pdf"


class PdfPreviewClient:
    def __init__(self, base_url: str, http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._http = http_client
        self._owns_http = http_client is None
        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None
        self.latest_pdf: Optional[bytes] = None
        self.latest_generation = 0

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(base_url=self.base_url, timeout=60)
        return self._http

    @property
    def generation(self) -> int:
        return self._generation

    async def _fetch(self, payload: Dict[str, Any]) -> bytes:
        resp = await self.http.post(PREVIEW_PATH, json=payload)
        resp.raise_for_status()
        return resp.content

    async def request_preview(
        self,
        resume_data: Dict[str, Any],
        job_description: Optional[str] = None,
    ) -> Optional[bytes]:
        """
        Render a preview. Returns the PDF bytes, or None when a newer request
        superseded this one before it finished.
        """
        self._generation += 1
        generation = self._generation

        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        payload: Dict[str, Any] = {"resumeData": resume_data}
        if job_description:
            payload["jobDescription"] = job_description
        task = asyncio.ensure_future(self._fetch(payload))
        self._inflight = task

        try:
            pdf = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Preview %d cancelled by a newer request", generation)
                return None
            raise

        if generation != self._generation:
            logger.debug("Discarding stale preview %d (current %d)", generation, self._generation)
            return None

        self.latest_pdf = pdf
        self.latest_generation = generation
        return pdf

    async def aclose(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        if self._owns_http and self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> "PdfPreviewClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from docbundle.config import get_settings
from docbundle.errors import DocumentFetchError
from docbundle.utils.logging import get_logger

log = get_logger("docbundle.client")


class DocumentClient:
    """
    Minimal HTTP client for product documents.

    One GET per URL, no retries. Any non-2xx status raises DocumentFetchError.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/pdf, application/json;q=0.9, */*;q=0.5",
            "User-Agent": user_agent or settings.USER_AGENT,
        })

    def _get(self, url: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.get(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise DocumentFetchError(f"Request to {url} failed: {e}", url) from e
        # Redirects are followed by requests; any other non-2xx is a failure
        if not 200 <= resp.status_code < 300:
            resp.close()
            raise DocumentFetchError(f"HTTP {resp.status_code}: {resp.reason}", url, resp)
        return resp

    @staticmethod
    def _read_body(url: str, resp: requests.Response) -> bytes:
        # A dropped connection surfaces while the body is read, not on get()
        try:
            return resp.content
        except requests.RequestException as e:
            raise DocumentFetchError(f"Reading {url} failed: {e}", url, resp) from e

    def fetch_bytes(self, url: str) -> bytes:
        resp = self._get(url)
        with resp:
            data = self._read_body(url, resp)
        log.debug("Fetched %d bytes from %s", len(data), url)
        return data

    def fetch_json(self, url: str) -> Dict[str, Any]:
        resp = self._get(url, headers={"Accept": "application/json"})
        with resp:
            try:
                return resp.json()
            except ValueError as e:
                raise DocumentFetchError(f"Invalid JSON from {url}: {e}", url, resp) from e

    def download_to(self, url: str, destination, chunk_size: int = 8192) -> None:
        """Stream `url` into the file at `destination`."""
        resp = self._get(url, stream=True)
        with resp, open(destination, "wb") as fh:
            try:
                for chunk in resp.iter_content(chunk_size=chunk_size):
                    if chunk:
                        fh.write(chunk)
            except requests.RequestException as e:
                raise DocumentFetchError(f"Download of {url} interrupted: {e}", url, resp) from e

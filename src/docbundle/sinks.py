"""
docbundle.sinks

Where finished downloads go. The merger only talks to the DownloadSink
protocol; DirectorySink is the production implementation and writes into a
local directory.
"""

from __future__ import annotations

import webbrowser
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from werkzeug.utils import secure_filename

from docbundle.clients.document_client import DocumentClient
from docbundle.config import get_settings
from docbundle.utils.logging import get_logger

log = get_logger("docbundle.sink")

Payload = Union[bytes, str]

DEFAULT_FILENAME = "download.pdf"


@runtime_checkable
class DownloadSink(Protocol):
    def trigger(self, payload: Payload, filename: str) -> None:
        """Deliver `payload` (PDF bytes, or a URL to fetch) under `filename`."""

    def open_url(self, url: str) -> None:
        """Hand `url` to the user directly (fallback path)."""


class DirectorySink:
    """
    Saves downloads into `output_dir`. URL payloads are streamed to disk,
    byte payloads are written as-is.
    """

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        client: Optional[DocumentClient] = None,
        open_in_browser: Optional[bool] = None,
    ):
        settings = get_settings()
        self.output_dir = Path(output_dir or settings.OUTPUT_DIR).resolve()
        self.client = client or DocumentClient()
        self.open_in_browser = settings.OPEN_FALLBACK_IN_BROWSER if open_in_browser is None else open_in_browser
        self.saved: list[Path] = []
        self.opened: list[str] = []

    def _target(self, filename: str) -> Path:
        # Names come from the catalog; never let them escape output_dir
        safe = secure_filename(filename)
        # secure_filename drops non-ASCII characters and can eat the stem
        if filename.lower().endswith(".pdf") and not safe.lower().endswith(".pdf"):
            safe = ""
        safe = safe or DEFAULT_FILENAME
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / safe

    def trigger(self, payload: Payload, filename: str) -> None:
        destination = self._target(filename)
        try:
            if isinstance(payload, (bytes, bytearray)):
                destination.write_bytes(bytes(payload))
            else:
                log.info("Downloading %s", payload)
                self.client.download_to(payload, destination)
        except Exception:
            # no truncated file under the final name
            destination.unlink(missing_ok=True)
            raise
        log.info("Saved %s", destination)
        self.saved.append(destination)

    def open_url(self, url: str) -> None:
        self.opened.append(url)
        if not self.open_in_browser:
            log.info("Fallback URL (browser disabled): %s", url)
            return
        if not webbrowser.open_new_tab(url):
            log.warning("No browser available to open %s", url)

"""
docbundle.merger

Delivers a list of product documents as one download:

  - no files      → warning, nothing happens
  - one file      → handed to the sink as-is (no fetch, no merge)
  - several files → fetched in order, pages concatenated into one PDF

A file that cannot be fetched or parsed is skipped; the remaining files are
still merged. If building or writing the combined PDF fails, the first source
file is opened directly instead.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from pypdf import PdfWriter

from docbundle.clients.document_client import DocumentClient
from docbundle.config import get_settings
from docbundle.models import FileDescriptor, MergeOutcome, MergeRequest
from docbundle.sinks import DirectorySink, DownloadSink
from docbundle.utils.logging import get_logger
from docbundle.utils.pdfmerger import append_pdf, write_pdf

SINGLE_FILE_FALLBACK_NAME = "download.pdf"


class DocumentMerger:
    def __init__(
        self,
        client: Optional[DocumentClient] = None,
        sink: Optional[DownloadSink] = None,
        logger: Optional[logging.Logger] = None,
        guard_duplicates: Optional[bool] = None,
    ):
        settings = get_settings()
        self.client = client or DocumentClient()
        self.sink = sink or DirectorySink(client=self.client)
        self.log = logger or get_logger("docbundle.merger")
        self.guard_duplicates = settings.GUARD_DUPLICATE_MERGES if guard_duplicates is None else guard_duplicates
        self._lock = threading.Lock()
        self._in_flight: set[str] = set()

    # --- In-flight guard -------------------------------------------------------

    def _acquire(self, name: str) -> bool:
        if not self.guard_duplicates:
            return True
        with self._lock:
            if name in self._in_flight:
                return False
            self._in_flight.add(name)
            return True

    def _release(self, name: str) -> None:
        if not self.guard_duplicates:
            return
        with self._lock:
            self._in_flight.discard(name)

    # --- Public API ------------------------------------------------------------

    def merge(self, request: MergeRequest) -> MergeOutcome:
        return self.merge_and_download(request.files, request.output_name)

    def merge_and_download(self, files: Sequence[FileDescriptor], output_base_name: str) -> MergeOutcome:
        """
        Deliver `files` through the sink. Never raises; the returned outcome
        says which path was taken.
        """
        files = list(files)
        if not files:
            self.log.warning("No files available for download (%s)", output_base_name)
            return MergeOutcome(kind="empty")

        if len(files) == 1:
            return self._deliver_single(files[0])

        if not self._acquire(output_base_name):
            self.log.warning("Merge for %s already running; ignoring duplicate request", output_base_name)
            return MergeOutcome(kind="busy", filename=f"{output_base_name}.pdf")
        try:
            return self._merge(files, output_base_name)
        finally:
            self._release(output_base_name)

    # --- Internals -------------------------------------------------------------

    def _deliver_single(self, file: FileDescriptor) -> MergeOutcome:
        filename = file.name or SINGLE_FILE_FALLBACK_NAME
        self.log.info("Downloading single file: %s", filename)
        try:
            self.sink.trigger(file.url, filename)
        except Exception:
            self.log.error("Direct download of %s failed; opening it instead", filename, exc_info=True)
            try:
                self.sink.open_url(file.url)
            except Exception:
                self.log.error("Fallback failed for %s", file.url, exc_info=True)
            return MergeOutcome(kind="fallback", url=file.url)
        return MergeOutcome(kind="single", filename=filename, url=file.url)

    def _collect_pages(self, writer: PdfWriter, file: FileDescriptor) -> int:
        self.log.info("Fetching file: %s", file.name)
        data = self.client.fetch_bytes(file.url)
        added = append_pdf(writer, data)
        self.log.info("Added %d pages from: %s", added, file.name)
        return added

    def _merge(self, files: list[FileDescriptor], output_base_name: str) -> MergeOutcome:
        filename = f"{output_base_name}.pdf"
        self.log.info("Combining %d PDF files: %s", len(files), [f.name for f in files])

        writer: Optional[PdfWriter] = None
        pages = 0
        skipped: list[str] = []
        try:
            writer = PdfWriter()
            for file in files:
                try:
                    pages += self._collect_pages(writer, file)
                except Exception as exc:
                    self.log.warning("Failed to merge file: %s (%s)", file.name or file.url, exc)
                    skipped.append(file.name or file.url)

            self.log.info("Generating combined PDF...")
            data = write_pdf(writer)
            self.sink.trigger(data, filename)
            self.log.info("Combined PDF download completed: %s (%d pages)", filename, pages)
            return MergeOutcome(kind="merged", filename=filename, pages=pages, skipped=skipped)
        except Exception:
            self.log.error("Error creating combined PDF %s", filename, exc_info=True)
            self.log.info("Fallback: opening first file %s", files[0].url)
            try:
                self.sink.open_url(files[0].url)
            except Exception:
                self.log.error("Fallback failed for %s", files[0].url, exc_info=True)
            return MergeOutcome(kind="fallback", pages=pages, skipped=skipped, url=files[0].url)
        finally:
            if writer is not None:
                writer.close()

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from docbundle.config import Settings, get_settings
from docbundle.merger import DocumentMerger
from docbundle.models import Catalog, FileDescriptor, MergeOutcome, ResolvedFiles
from docbundle.resolver import resolve
from docbundle.utils.logging import get_logger

DATA_SHEET_LABEL = "Data Sheet"
CONFORMITY_LABEL = "Declaration of Conformity"


@dataclass(frozen=True)
class DownloadButton:
    label: str
    output_name: str
    files: tuple[FileDescriptor, ...]

    @property
    def enabled(self) -> bool:
        return bool(self.files)


class DownloadPanel:
    """
    Data sheet / declaration of conformity downloads for one product.

    Args:
        product_category: product tag selecting the resolver rule (may be None)
        download_data: catalog for the product; None means nothing to offer
        merger: DocumentMerger used by the click handlers
    """

    def __init__(
        self,
        product_category: Optional[str],
        download_data: Optional[Catalog],
        merger: Optional[DocumentMerger] = None,
        settings: Optional[Settings] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings or get_settings()
        self.product_category = product_category
        self.download_data = download_data
        self.log = logger or get_logger("docbundle.panel")
        self._merger = merger

        if download_data is None:
            self.log.warning("DownloadPanel: No download data available for %s", product_category)
            self.files = ResolvedFiles()
        else:
            self.files = resolve(product_category, download_data)

    @property
    def merger(self) -> DocumentMerger:
        if self._merger is None:
            self._merger = DocumentMerger()
        return self._merger

    @property
    def prefix(self) -> str:
        category = self.product_category
        if category is not None and hasattr(category, "value"):
            category = category.value
        return category or self.settings.DEFAULT_PRODUCT_LABEL

    @property
    def data_sheet_name(self) -> str:
        return f"{self.prefix}_Data_Sheets"

    @property
    def conformity_name(self) -> str:
        return f"{self.prefix}_Conformity_Documents"

    def render(self) -> Optional[list[DownloadButton]]:
        """Buttons to show, or None when there is nothing to download."""
        if self.download_data is None or self.files.is_empty:
            return None
        return [
            DownloadButton(DATA_SHEET_LABEL, self.data_sheet_name, tuple(self.files.data_sheet_files)),
            DownloadButton(CONFORMITY_LABEL, self.conformity_name, tuple(self.files.conformity_files)),
        ]

    def download_data_sheets(self) -> MergeOutcome:
        return self.merger.merge_and_download(self.files.data_sheet_files, self.data_sheet_name)

    def download_conformity(self) -> MergeOutcome:
        return self.merger.merge_and_download(self.files.conformity_files, self.conformity_name)

from __future__ import annotations

from typing import Optional

from requests import Response


class DocbundleError(RuntimeError):
    """Base class for errors raised by docbundle."""


class DocumentFetchError(DocbundleError):
    def __init__(self, message: str, url: str, response: Optional[Response] = None):
        super().__init__(message)
        self.url = url
        self.response = response
        self.status_code = getattr(response, "status_code", None)


class CatalogError(DocbundleError):
    """Catalog could not be read or does not match the expected shape."""

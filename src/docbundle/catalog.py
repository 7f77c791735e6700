from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from docbundle.clients.document_client import DocumentClient
from docbundle.errors import CatalogError, DocumentFetchError
from docbundle.models import Catalog


def is_url(source: Union[str, Path]) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def parse_catalog(data: Dict[str, Any]) -> Catalog:
    try:
        return Catalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog: {e}") from e


def load_catalog(source: Union[str, Path], client: Optional[DocumentClient] = None) -> Catalog:
    """
    Load a catalog from a JSON file or an http(s) URL.
    """
    if is_url(source):
        client = client or DocumentClient()
        try:
            data = client.fetch_json(str(source))
        except DocumentFetchError as e:
            raise CatalogError(f"Could not fetch catalog {source}: {e}") from e
        return parse_catalog(data)

    path = Path(source)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {path} is not valid JSON: {e}") from e
    return parse_catalog(data)

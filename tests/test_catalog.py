"""Tests for docbundle.catalog."""

from __future__ import annotations

import json

import pytest

from docbundle.catalog import load_catalog
from docbundle.clients.document_client import DocumentClient
from docbundle.errors import CatalogError

CATALOG = {
    "categories": [
        {
            "name": "Technical Specifications",
            "files": [{"name": "spec.pdf", "url": "https://cdn.example.com/spec.pdf"}],
        },
        {"name": "Certification", "files": [{"url": "https://cdn.example.com/ce.pdf"}]},
        {"name": "Empty"},
    ]
}


def test_load_catalog_from_file(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")

    catalog = load_catalog(path)

    assert [c.name for c in catalog.categories] == ["Technical Specifications", "Certification", "Empty"]
    assert catalog.categories[1].files[0].name == ""
    assert catalog.categories[2].files == []


def test_load_catalog_from_url(fake_session, response) -> None:
    fake_session.routes["https://example.com/catalog.json"] = response(200, json_data=CATALOG)

    catalog = load_catalog("https://example.com/catalog.json", client=DocumentClient(session=fake_session))

    assert catalog.categories[0].files[0].url == "https://cdn.example.com/spec.pdf"


def test_unreachable_url_raises_catalog_error(fake_session) -> None:
    with pytest.raises(CatalogError, match="Could not fetch"):
        load_catalog("https://example.com/missing.json", client=DocumentClient(session=fake_session))


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(CatalogError, match="not found"):
        load_catalog(tmp_path / "nope.json")


def test_invalid_json_raises(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text("{categories:", encoding="utf-8")

    with pytest.raises(CatalogError, match="not valid JSON"):
        load_catalog(path)


def test_schema_mismatch_raises(tmp_path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"categories": [{"files": []}]}), encoding="utf-8")

    with pytest.raises(CatalogError, match="Invalid catalog"):
        load_catalog(path)

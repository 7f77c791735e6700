#!/usr/bin/env python3
"""
Download product documentation bundles from a catalog.

Usage:
    docbundle --catalog catalog.json --category dcChargingStation
    docbundle --catalog https://example.com/docs.json --bundle conformity --output-dir ./out
"""
from __future__ import annotations

import argparse
from typing import Optional, Sequence

from docbundle.catalog import load_catalog
from docbundle.config import get_settings
from docbundle.errors import CatalogError
from docbundle.merger import DocumentMerger
from docbundle.panel import DownloadPanel
from docbundle.sinks import DirectorySink
from docbundle.utils.logging import get_logger, setup_logging

BUNDLES = ("datasheets", "conformity", "all")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Download data sheets and conformity documents as single PDFs.")
    parser.add_argument("--catalog", required=True, help="Path or http(s) URL of the catalog JSON")
    parser.add_argument("--category", default=None, help="Product category, e.g. dcChargingStation")
    parser.add_argument("--bundle", choices=BUNDLES, default="all", help="Which bundle to download")
    parser.add_argument("--output-dir", default=None, help="Target directory (default: OUTPUT_DIR)")
    parser.add_argument("--no-browser", action="store_true", help="Do not open a browser on fallback")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    s = get_settings()
    setup_logging(level=s.LOG_LEVEL, json_output=(s.LOG_FORMAT == "json"))
    log = get_logger("docbundle.cli")
    for line in s.summary_lines():
        log.info(line)

    try:
        catalog = load_catalog(args.catalog)
    except CatalogError as e:
        log.error("%s", e)
        return 1

    sink = DirectorySink(output_dir=args.output_dir, open_in_browser=False if args.no_browser else None)
    panel = DownloadPanel(args.category, catalog, merger=DocumentMerger(client=sink.client, sink=sink))
    buttons = panel.render()
    if buttons is None:
        log.warning("Nothing to download for %s", args.category or s.DEFAULT_PRODUCT_LABEL)
        return 0

    for button in buttons:
        log.info("%s: %d file(s)%s", button.label, len(button.files), "" if button.enabled else " (disabled)")

    outcomes = []
    if args.bundle in ("datasheets", "all"):
        outcomes.append(panel.download_data_sheets())
    if args.bundle in ("conformity", "all"):
        outcomes.append(panel.download_conformity())

    for outcome in outcomes:
        if outcome.delivered:
            print(outcome.filename)
        elif outcome.kind == "fallback":
            print(f"fallback: {outcome.url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

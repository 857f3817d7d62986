"""Catalog loading and result export."""

from .loader import load_catalog, parse_catalog, catalog_summary, CatalogError
from .writer import (
    write_results,
    results_to_payload,
    results_to_frame,
    write_summary_csv,
)

__all__ = [
    "load_catalog",
    "parse_catalog",
    "catalog_summary",
    "CatalogError",
    "write_results",
    "results_to_payload",
    "results_to_frame",
    "write_summary_csv",
]

"""
Storefront Catalog Pipeline

Walks a single storefront's navigation, extracts product variants with
prices and stock, and normalizes them into a deduplicated catalog.

Modules:
    models      - Data models (CategoryLink, ProductLink, RawVariant, Product)
    common      - Shared utilities (constants, config loader, logging, page fetcher)
    discovery   - Category/listing navigation that yields product candidates
    extraction  - Per-template variant extraction and normalization
    pipeline    - Pipeline driver (navigate -> extract -> normalize -> export)
    export      - Export collaborators (CSV price list, SQL import script)
"""

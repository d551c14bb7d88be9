#!/usr/bin/env python3
"""
Catalog Extraction Script

Walks the configured storefront, extracts every product variant with
price and stock, and writes the price list / SQL import script.

Usage:
    python3 scrape_catalog.py
    python3 scrape_catalog.py --mode dry-run --limit 5 --verbose
    python3 scrape_catalog.py --mode csv --template listing
    python3 scrape_catalog.py --config config/site.yaml --output-dir output
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from catalog_pipeline.common import PageFetcher, load_config, load_export_settings, load_site_settings
from catalog_pipeline.common.config_loader import SUPPORTED_TEMPLATES
from catalog_pipeline.common.log_config import setup_logging
from catalog_pipeline.discovery import get_navigator_for_template
from catalog_pipeline.export import EXPORT_MODES, OutputLayout, build_exporters
from catalog_pipeline.extraction import get_extractor_for_template
from catalog_pipeline.pipeline import CatalogPipeline

load_dotenv()

logger = logging.getLogger("catalog_pipeline.cli")


def main():
    parser = argparse.ArgumentParser(
        description="Extract the storefront catalog into a price list and SQL import script"
    )
    parser.add_argument(
        "--config", "-c",
        help="YAML config file (default: config/site.yaml)"
    )
    parser.add_argument(
        "--template", "-t",
        choices=SUPPORTED_TEMPLATES,
        help="Override the storefront template from the config"
    )
    parser.add_argument(
        "--mode", "-m",
        choices=EXPORT_MODES,
        default="both",
        help="dry-run (parse only), csv, sql, or both (default: both)"
    )
    parser.add_argument(
        "--limit", "-l",
        type=int,
        default=0,
        help="Number of products to process, for test runs (0 = no limit)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        help="Base output directory (default: from config)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        site_settings = load_site_settings(config, template=args.template)
        export_settings = load_export_settings(config)
    except (OSError, ValueError) as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    layout = OutputLayout.for_run(args.output_dir or export_settings.output_dir)
    layout.ensure_dirs()
    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=layout.log_file)
    logger.info("********** LOGGING STARTED: %s **********", layout.started_at.strftime("%c"))

    print("=" * 60)
    print("Catalog Extraction")
    print("=" * 60)
    print(f"  Site:       {site_settings.site_root}")
    print(f"  Template:   {site_settings.template}")
    print(f"  Mode:       {args.mode}")
    print(f"  Limit:      {args.limit if args.limit else 'none'}")
    print(f"  Output dir: {layout.run_dir}")
    print(f"  Log file:   {layout.log_file}")

    NavigatorClass = get_navigator_for_template(site_settings.template)
    ExtractorClass = get_extractor_for_template(site_settings.template)

    with PageFetcher(timeout=site_settings.timeout, user_agent=site_settings.user_agent) as fetcher:
        pipeline = CatalogPipeline(
            navigator=NavigatorClass(fetcher, site_settings),
            extractor=ExtractorClass(fetcher, site_settings),
            exporters=build_exporters(args.mode, layout, export_settings),
            limit=args.limit,
        )
        pipeline.run()

    # Summary
    stats = pipeline.get_stats()
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    if "categories_found" in stats:
        print(f"  Categories found:   {stats['categories_found']}")
    if "pages_read" in stats:
        print(f"  Listing pages read: {stats['pages_read']}")
    print(f"  Products processed: {stats['products_processed']}")
    print(f"  Variants exported:  {stats['variants']}")
    print(f"  Duplicates skipped: {stats['duplicates_skipped']}")
    print(f"  Failures:           {stats['failures']}")
    if stats.get("failed_urls"):
        print(f"  Failed URLs:        {stats['failed_urls']}")
    print("=" * 60)


if __name__ == "__main__":
    main()

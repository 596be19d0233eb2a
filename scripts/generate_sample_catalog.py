#!/usr/bin/env python3
"""Generate a sample property catalog.

Writes synthetic providers and listings to JSON files, or to PostgreSQL
with ``--postgres``. Connection settings come from the same
environment variables the library reads (see ``CatalogConfig.from_env``).
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from estate_catalog.config import CatalogConfig
from estate_catalog.exceptions import CatalogError
from estate_catalog.generators import PropertyGenerator, ProviderGenerator
from estate_catalog.logging import setup_logging
from estate_catalog.models.enums import ProviderStatus
from estate_catalog.repository import (
    JsonFileProviderRepository,
    JsonFileRepository,
    PostgresProviderRepository,
    PostgresRepository,
)
from estate_catalog.search import count_feature_tags

logger = logging.getLogger("estate_catalog.scripts.generate_sample_catalog")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate a sample property catalog")
    parser.add_argument("--properties", type=int, default=200, help="Number of listings (default: 200)")
    parser.add_argument("--providers", type=int, default=15, help="Number of providers (default: 15)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: SEED env or none)")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Catalog JSON path (default: CATALOG_PATH env or catalog.json)",
    )
    parser.add_argument(
        "--providers-output",
        type=Path,
        default=None,
        help="Provider JSON path (default: PROVIDERS_PATH env or providers.json)",
    )
    parser.add_argument("--postgres", action="store_true", help="Write to PostgreSQL instead of JSON")
    parser.add_argument("--log-format", choices=["standard", "json"], default="standard", help="Log output format")
    args = parser.parse_args()

    try:
        config = CatalogConfig.from_env()
    except CatalogError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(config.log_level, args.log_format)
    seed = args.seed if args.seed is not None else config.seed

    providers = list(ProviderGenerator(seed=seed).generate_batch(args.providers))
    approved = [p.id for p in providers if p.status == ProviderStatus.APPROVED]
    generator = PropertyGenerator(seed=seed, provider_ids=approved)
    records = list(generator.generate_batch(args.properties))
    logger.info("Generated %d providers and %d properties", len(providers), len(records))

    if args.postgres:
        repositories = [
            (PostgresProviderRepository(config.postgres), providers),
            (PostgresRepository(config.postgres), records),
        ]
    else:
        pretty = config.storage.pretty_json
        providers_path = args.providers_output or config.storage.providers_path
        catalog_path = args.output or config.storage.catalog_path
        repositories = [
            (JsonFileProviderRepository(providers_path, pretty=pretty), providers),
            (JsonFileRepository(catalog_path, pretty=pretty), records),
        ]

    for repository, items in repositories:
        target = config.postgres.database if args.postgres else str(repository.path)
        try:
            if args.postgres:
                repository.ensure_schema()
            repository.save(items)
        except CatalogError:
            logger.exception("Failed to write %s to %s", repository.kind, target)
            sys.exit(1)
        logger.info("Wrote %d %s records to %s", len(items), repository.kind, target)

    for tag, count in count_feature_tags(records).items():
        if count:
            logger.info("  %-24s %d", tag, count)


if __name__ == "__main__":
    main()

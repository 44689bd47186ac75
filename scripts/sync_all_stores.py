"""
Sync all connected stores.

Pulls products and orders of every merchant with a usable Shopify or
WooCommerce connection into the local database.

Usage:
    python -m scripts.sync_all_stores [--delete-unlinked]
"""
import argparse
import asyncio
import logging
import sys

from api.dependencies import get_store_sync_service
from core.infrastructure.database.config import close_database, init_database
from core.infrastructure.logging import configure_logging


configure_logging()
logger = logging.getLogger(__name__)


async def sync_all_stores(delete_unlinked: bool) -> bool:
    logger.info("=" * 80)
    logger.info("STORE SYNC")
    logger.info("=" * 80)

    await init_database()
    try:
        reports = await get_store_sync_service().sync_all(delete_unlinked_orders=delete_unlinked)
    finally:
        await close_database()

    for report in reports:
        logger.info(f"\n🏪 {report.store_name or report.merchant_id}")
        if report.deleted_unlinked_orders:
            logger.info(f"   🗑  Deleted {report.deleted_unlinked_orders} unlinked orders")
        for p in report.platforms:
            if p.error:
                logger.info(f"   ❌ {p.platform}: {p.error}")
                continue
            logger.info(
                f"   ✅ {p.platform}: products {p.products.created} new / {p.products.updated} updated"
                f" ({p.products.errors} errors), orders {p.orders.created} new / {p.orders.updated} updated"
                f" ({p.orders.errors} errors)"
            )

    failed = [r for r in reports if not r.success]
    logger.info("=" * 80)
    logger.info(f"Synced {len(reports)} stores, {len(failed)} with platform errors")
    return not failed


def main():
    parser = argparse.ArgumentParser(description="Sync products and orders of all connected stores")
    parser.add_argument(
        "--delete-unlinked",
        action="store_true",
        help="Delete cached orders that have no platform order id before syncing",
    )
    args = parser.parse_args()

    ok = asyncio.run(sync_all_stores(args.delete_unlinked))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Orphan Reconciliation Script

Deletes applications whose job no longer exists. A job delete removes
applications first and the job last, so an interrupted delete can only
leave orphans behind; this sweep cleans them up. Safe to run repeatedly
(e.g. from cron).

Usage: python scripts/reconcile_orphans.py
"""
import logging
import sys
sys.path.insert(0, '.')

from jobboard.core.config import get_settings
from jobboard.db.mongodb import create_mongo_client, get_database
from jobboard.services.application_service import ApplicationService

logger = logging.getLogger("reconcile_orphans")


def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    client = create_mongo_client(settings)
    try:
        db = get_database(client, settings)
        removed = ApplicationService(db).purge_orphans()
    finally:
        client.close()

    logger.info("Reconciliation complete: %d orphaned applications removed", removed)
    return 0


if __name__ == "__main__":
    sys.exit(main())

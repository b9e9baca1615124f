"""
Import the shop item XML sheets of one language into the database.

Usage:
    python scripts/import_items.py <language> [--share-dir DIR] [--workers N] [--create-tables] [-v]

Reads share/shopitems/<language>/{StrSheet_Item, ItemData, ItemConversion}/*.xml
and upserts item_strings, item_templates and item_conversions. The database is
configured through DB_DATABASE, DB_USERNAME, DB_PASSWORD, DB_HOST and DB_PORT.

Exit status: 0 all rows written, 1 some rows failed, 2 database unreachable.
"""

import argparse
import logging
import os
import re
import sys

from sqlalchemy.exc import OperationalError

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loaders.config import SHARE_DIR, UPSERT_WORKERS, LANGUAGE_PATTERN
from models import get_engine, Base
from services import run_import

logger = logging.getLogger('import_items')


def language_code(value):
    if not re.match(LANGUAGE_PATTERN, value):
        raise argparse.ArgumentTypeError(f"invalid language code: {value!r}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(description="Import shop item XML sheets into the database.")
    parser.add_argument('language', type=language_code, help="Language code, e.g. 'en'")
    parser.add_argument('--share-dir', default=SHARE_DIR, help="Directory holding one sub directory per language")
    parser.add_argument('--workers', type=int, default=UPSERT_WORKERS, help="Upserts in flight at once")
    parser.add_argument('--db-url', default=None, help="SQLAlchemy URL, overrides the DB_* environment")
    parser.add_argument('--create-tables', action='store_true', help="Create missing tables before importing")
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    engine = get_engine(args.db_url)
    try:
        if args.create_tables:
            Base.metadata.create_all(engine)
        report = run_import(args.language, engine, share_dir=args.share_dir, max_workers=args.workers)
    except OperationalError as e:
        logger.error("Database unavailable: %s", e)
        return 2
    finally:
        engine.dispose()

    return 0 if report.ok else 1


if __name__ == '__main__':
    sys.exit(main())

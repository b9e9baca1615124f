"""
One import run: collect every dataset of a language, then write it.

Collection happens first and unconditionally; only the write phase depends
on the database being reachable.
"""

import logging
from dataclasses import dataclass, field
from functools import partial

from loaders import (
    load_shop_items,
    normalize_item_string,
    normalize_item_template,
    normalize_item_conversion,
)
from loaders.config import SHARE_DIR, UPSERT_WORKERS
from models import ItemString, ItemTemplate, ItemConversion
from .upserter import ItemUpserter

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    language: str
    reports: list = field(default_factory=list)
    missing: list = field(default_factory=list)

    @property
    def succeeded(self):
        return sum(r.succeeded for r in self.reports)

    @property
    def failed(self):
        return sum(r.failed for r in self.reports)

    @property
    def ok(self):
        return self.failed == 0

    def summary(self):
        parts = [f"{r.table}: {r.succeeded}/{r.total}" for r in self.reports]
        line = f"Import '{self.language}' finished: {self.succeeded} succeeded, {self.failed} failed ({', '.join(parts)})"
        if self.missing:
            line += f"; missing datasets: {', '.join(self.missing)}"
        return line


def _id_key(attrs):
    return attrs.get('id')


def _conversion_key(conversion):
    fields = ('itemTemplateId', 'fixedItemTemplateId', 'class', 'gender', 'race')
    return ' '.join(str(conversion.get(f) or '-') for f in fields)


def check_connection(engine):
    """Raises sqlalchemy.exc.OperationalError when the database is unreachable."""
    with engine.connect():
        pass


def run_import(language, engine, share_dir=SHARE_DIR, max_workers=UPSERT_WORKERS):
    """
    Import the shop item sheets of ``language`` into the database.

    Args:
        language (str): Language code, selects the source directory and tags strings
        engine: SQLAlchemy engine of the target database
        share_dir (str): Directory holding one sub directory per language
        max_workers (int): Upserts in flight at once

    Returns:
        ImportReport: per-table counts and the datasets that were missing
    """
    items = load_shop_items(language, share_dir=share_dir)

    check_connection(engine)

    upserter = ItemUpserter(engine, max_workers=max_workers)
    report = ImportReport(language=language, missing=list(items.missing))

    report.reports.append(upserter.upsert_all(
        ItemString, items.strings, partial(normalize_item_string, language), key=_id_key
    ))
    report.reports.append(upserter.upsert_all(
        ItemTemplate, items.templates.values(), normalize_item_template, key=_id_key
    ))
    report.reports.append(upserter.upsert_all(
        ItemConversion, items.conversions, normalize_item_conversion, key=_conversion_key
    ))

    logger.info(report.summary())
    return report

"""
Idempotent writes of normalized shop item rows.

Each record is normalized and written in its own short transaction on a
thread pool; the engine's connection pool bounds how many hit the database
at once. The caller gets an UpsertReport once every record has finished.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from sqlalchemy.dialects import mysql, postgresql, sqlite

from loaders.config import UPSERT_WORKERS

logger = logging.getLogger(__name__)


class UnsupportedDialectError(Exception):
    """The database has no native insert-or-update we know how to emit."""


@dataclass
class UpsertReport:
    table: str
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: list = field(default_factory=list)  # [(key, exception), ...]

    @property
    def ok(self):
        return self.failed == 0


def _on_conflict_upsert(insert):
    def build(table, row):
        stmt = insert(table).values(row)
        updates = {
            col: stmt.excluded[col.key]
            for col in table.columns
            if not col.primary_key
        }
        key = list(table.primary_key.columns)
        if not updates:
            return stmt.on_conflict_do_nothing(index_elements=key)
        return stmt.on_conflict_do_update(index_elements=key, set_=updates)
    return build


def _mysql_upsert(table, row):
    stmt = mysql.insert(table).values(row)
    updates = {
        col: stmt.inserted[col.key]
        for col in table.columns
        if not col.primary_key
    }
    if not updates:
        # Key-only table: a no-op assignment keeps the existing row
        col = list(table.primary_key.columns)[0]
        updates = {col: stmt.inserted[col.key]}
    return stmt.on_duplicate_key_update(updates)


UPSERT_BUILDERS = {
    'mysql': _mysql_upsert,
    'mariadb': _mysql_upsert,
    'sqlite': _on_conflict_upsert(sqlite.insert),
    'postgresql': _on_conflict_upsert(postgresql.insert),
}


def build_upsert(dialect_name, table, row):
    """
    Build the dialect's native insert-or-update for one row keyed by the
    table's primary key.
    """
    try:
        builder = UPSERT_BUILDERS[dialect_name]
    except KeyError:
        raise UnsupportedDialectError(f"No upsert support for dialect '{dialect_name}'") from None
    return builder(table, row)


class ItemUpserter:
    def __init__(self, engine, max_workers=UPSERT_WORKERS):
        self.engine = engine
        self.max_workers = max_workers

    def upsert_one(self, table, row):
        stmt = build_upsert(self.engine.dialect.name, table, row)
        with self.engine.begin() as conn:
            conn.execute(stmt)

    def _write(self, table, normalize, record):
        self.upsert_one(table, normalize(record))

    def upsert_all(self, model, records, normalize, key=None):
        """
        Normalize and upsert every record, waiting for all of them.

        Args:
            model: Declarative model whose table receives the rows
            records (iterable): Raw records as produced by the collectors
            normalize (callable): record → row dict
            key (callable): record → label used in progress and error lines

        Returns:
            UpsertReport: counts of succeeded and failed records
        """
        table = model.__table__
        key = key or repr
        records = list(records)
        report = UpsertReport(table=table.name, total=len(records))

        if not records:
            return report

        logger.info("Adding %d %s rows...", report.total, table.name)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            pending = {
                executor.submit(self._write, table, normalize, record): key(record)
                for record in records
            }

            for done in as_completed(pending):
                record_key = pending.pop(done)
                try:
                    done.result()
                except Exception as error:
                    report.failed += 1
                    report.errors.append((record_key, error))
                    logger.warning("Failed %s %s: %s", table.name, record_key, error)
                else:
                    report.succeeded += 1
                    logger.info(
                        "%d / %d Added: %s",
                        report.succeeded + report.failed, report.total, record_key
                    )

        return report

from .item_service import ItemService
from .upserter import ItemUpserter, UpsertReport, UnsupportedDialectError, build_upsert
from .importer import run_import, ImportReport

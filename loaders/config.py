"""
Configuration constants for shop item data loading.

This module centralizes the paths, dataset names and database sizing used by
the importer, making it easy to adjust them without touching core logic.
"""

import os

# Source data: <SHARE_DIR>/<language>/<dataset dir>/*.xml
SHARE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'share', 'shopitems')
STRSHEET_DIR = 'StrSheet_Item'
DATA_DIR = 'ItemData'
CONVERSION_DIR = 'ItemConversion'
XML_EXTENSION = '.xml'

# Child tag of a conversion element that names one fixed item
FIXED_ITEM_TAG = 'FixedItem'

# Language codes end up in a filesystem path
LANGUAGE_PATTERN = r'^[A-Za-z0-9_-]+$'

# Database connection (environment variable names)
DB_ENV_DATABASE = 'DB_DATABASE'
DB_ENV_USERNAME = 'DB_USERNAME'
DB_ENV_PASSWORD = 'DB_PASSWORD'
DB_ENV_HOST = 'DB_HOST'
DB_ENV_PORT = 'DB_PORT'
DEFAULT_DB_PORT = 3306
DEFAULT_DB_DRIVER = 'mysql+pymysql'
DEFAULT_DB_URL = 'sqlite:///shopitems.db'

# Connection pool (server databases only): 100 connections max
POOL_SIZE = 10
POOL_MAX_OVERFLOW = 90
POOL_TIMEOUT = 1000   # seconds to wait for a free connection
POOL_RECYCLE = 200    # seconds before an idle connection is replaced

# Upserts in flight at once
UPSERT_WORKERS = 16

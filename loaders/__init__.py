"""
XML data loaders for shop items.

This package reads the per-language XML game data sheets and turns them into
rows for the item_strings, item_templates and item_conversions tables.

Architecture:
    XML → xml_loader → collectors → normalizer → services.upserter → database

Modules:
    config: Configuration constants
    xml_loader: XML directory listing and parsing
    collectors: StrSheet / ItemData / ItemConversion collection
    normalizer: Attribute dicts → table rows
"""

from .collectors import load_shop_items, ShopItems
from .normalizer import (
    normalize_item_string,
    normalize_item_template,
    normalize_item_conversion,
    InvalidRecordError,
)

__all__ = [
    'load_shop_items',
    'ShopItems',
    'normalize_item_string',
    'normalize_item_template',
    'normalize_item_conversion',
    'InvalidRecordError',
]

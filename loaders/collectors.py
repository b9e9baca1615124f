"""
Collection of the three shop item datasets for one language.

Pipeline:
    <share>/<language>/StrSheet_Item/*.xml   → strings      (list, encounter order)
    <share>/<language>/ItemData/*.xml        → templates    (dict by id, last file wins)
    <share>/<language>/ItemConversion/*.xml  → conversions  (list, one per FixedItem)

Records are kept as plain attribute dicts; normalization into table rows
happens later, per record, when they are written (see loaders.normalizer).

Functions:
    collect_strsheet: Keep string sheet elements with a non-empty string
    collect_data: Index data sheet elements by id
    collect_conversions: Flatten conversion elements into one record per fixed item
    load_directory: Run one collector over every XML file of a directory
    load_shop_items: Load all three datasets for a language
"""

import logging
import os
from dataclasses import dataclass, field

from .config import SHARE_DIR, STRSHEET_DIR, DATA_DIR, CONVERSION_DIR, FIXED_ITEM_TAG
from .xml_loader import list_xml_files, read_xml

logger = logging.getLogger(__name__)


@dataclass
class ShopItems:
    """Everything collected for one language, ready to be written."""
    language: str
    strings: list = field(default_factory=list)
    templates: dict = field(default_factory=dict)
    conversions: list = field(default_factory=list)
    missing: list = field(default_factory=list)


def collect_strsheet(elements, into):
    """
    Append the attributes of every element that carries a non-empty string.

    A missing ``string`` attribute counts as empty.
    """
    for element in elements:
        if element.get('string', '') != '':
            into.append(dict(element.attrib))
    return into


def collect_data(elements, into):
    """
    Index element attributes by ``id``.

    A later element with the same id replaces the earlier one, no merge and
    no warning. Elements without an id cannot be keyed and are skipped.
    """
    for element in elements:
        attrs = dict(element.attrib)
        item_id = attrs.get('id')
        if item_id is None:
            logger.debug("Skipping <%s> without id", element.tag)
            continue
        into[item_id] = attrs
    return into


def collect_conversions(elements, into):
    """
    Flatten conversion elements into one record per FixedItem child.

    Example:
        <Conversion itemTemplateId="100">
            <FixedItem templateId="101" class="Warrior"/>
            <FixedItem templateId="102"/>
        </Conversion>
    yields
        {'itemTemplateId': '100', 'fixedItemTemplateId': '101', 'class': 'Warrior', 'gender': None, 'race': None}
        {'itemTemplateId': '100', 'fixedItemTemplateId': '102', 'class': None, 'gender': None, 'race': None}
    """
    for element in elements:
        for child in element:
            if child.tag != FIXED_ITEM_TAG:
                continue
            into.append({
                'itemTemplateId': element.get('itemTemplateId'),
                'fixedItemTemplateId': child.get('templateId'),
                'class': child.get('class') or None,
                'gender': child.get('gender') or None,
                'race': child.get('race') or None,
            })
    return into


def load_directory(directory, collect, into, label):
    """
    Feed every XML file of ``directory`` to ``collect``.

    Returns False (and logs an error) when the directory does not exist,
    leaving ``into`` untouched. Malformed XML is not caught.
    """
    if not os.path.isdir(directory):
        logger.error("%s directory not found: %s", label, directory)
        return False

    for path in list_xml_files(directory):
        elements = read_xml(path)
        collect(elements, into)
        logger.info("---> Loaded file %s with %d elements", os.path.basename(path), len(elements))
    return True


def load_shop_items(language, share_dir=SHARE_DIR):
    """
    Load the string, data and conversion sheets of one language.

    All three datasets are read before anything is written, so a malformed
    file aborts the run with the database untouched.

    Returns:
        ShopItems: collected records plus the names of missing datasets
    """
    base_dir = os.path.join(share_dir, language)
    items = ShopItems(language=language)

    datasets = [
        (STRSHEET_DIR, collect_strsheet, items.strings, 'StrSheet'),
        (DATA_DIR, collect_data, items.templates, 'Data'),
        (CONVERSION_DIR, collect_conversions, items.conversions, 'Conversion'),
    ]

    for dir_name, collect, into, label in datasets:
        logger.info("Loading %s files...", label)
        if not load_directory(os.path.join(base_dir, dir_name), collect, into, label):
            items.missing.append(label)

    logger.info(
        "Collected %d strings, %d templates, %d conversions for '%s'",
        len(items.strings), len(items.templates), len(items.conversions), language
    )
    return items

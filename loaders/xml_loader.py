"""
XML file access for the shop item datasets.

Every dataset file has the same outer shape: one root element whose children
are the records. Comments are dropped at parse time so callers only ever see
elements.
"""

import os

from lxml import etree

from .config import XML_EXTENSION


def list_xml_files(directory):
    """
    List the XML files of a dataset directory, sorted by name.

    Entries that are not regular files or do not end in ``.xml`` are ignored.
    The sort order is the order in which records are applied, so for the
    data sheet the last file listed wins on duplicate ids.
    """
    names = sorted(os.listdir(directory))
    return [
        os.path.join(directory, name)
        for name in names
        if os.path.splitext(name)[1] == XML_EXTENSION
        and os.path.isfile(os.path.join(directory, name))
    ]


def read_xml(path):
    """
    Parse an XML file and return the child elements of its root.

    Raises lxml.etree.XMLSyntaxError on malformed input.
    """
    parser = etree.XMLParser(remove_comments=True, remove_pis=True)
    root = etree.parse(path, parser).getroot()
    return [child for child in root if isinstance(child.tag, str)]

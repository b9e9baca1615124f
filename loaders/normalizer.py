"""
Field normalization for shop item records.

This module turns the raw attribute dicts produced by the collectors into
row dicts keyed by column name, ready for an insert statement.

Functions:
    icon_suffix: 'Icon_Items.Sword.DDS' → 'dds'
    flag: 'true' → 1, anything else → 0
    normalize_item_string: StrSheet attributes → item_strings row
    normalize_item_template: ItemData attributes → item_templates row
    normalize_item_conversion: conversion record → item_conversions row
"""


class InvalidRecordError(ValueError):
    """A record is missing a required attribute or holds a non-numeric number."""


def _to_int(value, name, record_id):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidRecordError(f"{name}={value!r} is not a number (id={record_id})") from None


def _lower_or_none(value):
    return value.lower() if value else None


def icon_suffix(icon):
    """
    Extract the icon format token: the text after the final '.', lowercased.

    Examples:
        >>> icon_suffix('textures/weapon.SWORD.DDS')
        'dds'
        >>> icon_suffix('PNG')
        'png'
    """
    return icon.rsplit('.', 1)[-1].lower()


def flag(value):
    """Only the literal string 'true' is set."""
    return int(value == 'true')


def normalize_item_string(language, attrs):
    """
    Build an item_strings row.

    Args:
        language (str): Language code the sheet was loaded for
        attrs (dict): StrSheet attributes {id, string, toolTip?}
    """
    return {
        'language': language,
        'item_template_id': _to_int(attrs.get('id'), 'id', attrs.get('id')),
        'string': str(attrs['string']),
        'tool_tip': str(attrs.get('toolTip') or ''),
    }


def normalize_item_template(attrs):
    """
    Build an item_templates row.

    Args:
        attrs (dict): ItemData attributes {id, icon, rareGrade, requiredLevel?,
                      requiredClass?, requiredGender?, requiredRace?,
                      tradable?, warehouseStorable?}

    Raises:
        InvalidRecordError: id, icon or rareGrade missing or malformed
    """
    item_id = attrs.get('id')
    icon = attrs.get('icon')
    if not icon:
        raise InvalidRecordError(f"icon is missing (id={item_id})")

    required_level = attrs.get('requiredLevel')

    return {
        'item_template_id': _to_int(item_id, 'id', item_id),
        'icon': icon_suffix(icon),
        'rare_grade': _to_int(attrs.get('rareGrade'), 'rareGrade', item_id),
        'required_level': _to_int(required_level, 'requiredLevel', item_id) if required_level else None,
        'required_class': _lower_or_none(attrs.get('requiredClass')),
        'required_gender': _lower_or_none(attrs.get('requiredGender')),
        'required_race': _lower_or_none(attrs.get('requiredRace')),
        'tradable': flag(attrs.get('tradable')),
        'warehouse_storable': flag(attrs.get('warehouseStorable')),
    }


def normalize_item_conversion(conversion):
    """
    Build an item_conversions row.

    Absent class, gender or race are stored as '' (any), also when
    ``conversion`` itself is None; the five columns together are the key.
    """
    conversion = conversion or {}
    item_id = conversion.get('itemTemplateId')
    return {
        'item_template_id': _to_int(item_id, 'itemTemplateId', item_id),
        'fixed_item_template_id': _to_int(
            conversion.get('fixedItemTemplateId'), 'fixedItemTemplateId', item_id
        ),
        'class': conversion.get('class') or '',
        'gender': conversion.get('gender') or '',
        'race': conversion.get('race') or '',
    }

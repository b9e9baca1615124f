import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from models import get_engine, Base


STRSHEET_XML = """<?xml version="1.0" encoding="utf-8"?>
<StrSheet_Item>
    <!-- swords -->
    <String id="100" string="Iron Sword" toolTip="A plain sword."/>
    <String id="101" string="Warrior Sword"/>
    <String id="102" string="Mystic Sword" toolTip="Glows faintly."/>
    <String id="103" string=""/>
</StrSheet_Item>
"""

ITEMDATA_XML = """<?xml version="1.0" encoding="utf-8"?>
<ItemData>
    <Item id="100" icon="Icon_Items.Sword_Tex.DDS" rareGrade="1" tradable="true" warehouseStorable="true"/>
    <Item id="101" icon="Icon_Items.Sword_Warrior.DDS" rareGrade="2" requiredLevel="60"
          requiredClass="Warrior" requiredGender="Female" requiredRace="Human" tradable="false" warehouseStorable="true"/>
    <Item id="102" icon="Icon_Items.Sword_Mystic.PNG" rareGrade="3" tradable="True"/>
</ItemData>
"""

CONVERSION_XML = """<?xml version="1.0" encoding="utf-8"?>
<ItemConversion>
    <Conversion itemTemplateId="100">
        <FixedItem templateId="101" class="warrior"/>
        <FixedItem templateId="102" class="mystic" gender="female" race="elf"/>
    </Conversion>
    <Conversion itemTemplateId="200"/>
</ItemConversion>
"""


def write_xml(directory, name, content):
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path


@pytest.fixture
def share_dir(tmp_path):
    """A share/shopitems tree with one language ('en') and all three datasets."""
    root = tmp_path / "shopitems"
    lang = root / "en"
    write_xml(str(lang / "StrSheet_Item"), "StrSheet_Item-0.xml", STRSHEET_XML)
    write_xml(str(lang / "ItemData"), "ItemData-0.xml", ITEMDATA_XML)
    write_xml(str(lang / "ItemConversion"), "ItemConversion-0.xml", CONVERSION_XML)
    return str(root)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'items.db'}"


@pytest.fixture
def engine(db_url):
    engine = get_engine(db_url)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()

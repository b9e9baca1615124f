"""End-to-end tests for an import run against SQLite."""

import shutil

import pytest
import sys
import os

from lxml import etree
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from models import ItemString, ItemTemplate, ItemConversion
from services.importer import run_import
from conftest import write_xml


def snapshot(engine):
    """Every row of the three tables as plain tuples."""
    with Session(engine) as session:
        return {
            'strings': sorted(
                (s.language, s.item_template_id, s.string, s.tool_tip)
                for s in session.query(ItemString)
            ),
            'templates': sorted(
                (t.item_template_id, t.icon, t.rare_grade, t.required_level, t.required_class,
                 t.required_gender, t.required_race, t.tradable, t.warehouse_storable)
                for t in session.query(ItemTemplate)
            ),
            'conversions': sorted(
                (c.item_template_id, c.fixed_item_template_id, c.class_, c.gender, c.race)
                for c in session.query(ItemConversion)
            ),
        }


class TestRunImport:

    def test_imports_all_tables(self, share_dir, engine):
        report = run_import('en', engine, share_dir=share_dir, max_workers=4)

        assert report.ok
        assert report.missing == []
        assert [r.table for r in report.reports] == ['item_strings', 'item_templates', 'item_conversions']
        assert report.succeeded == 3 + 3 + 2

        rows = snapshot(engine)
        assert rows['strings'] == [
            ('en', 100, 'Iron Sword', 'A plain sword.'),
            ('en', 101, 'Warrior Sword', ''),
            ('en', 102, 'Mystic Sword', 'Glows faintly.'),
        ]
        assert rows['templates'] == [
            (100, 'dds', 1, None, None, None, None, 1, 1),
            (101, 'dds', 2, 60, 'warrior', 'female', 'human', 0, 1),
            (102, 'png', 3, None, None, None, None, 0, 0),
        ]
        assert rows['conversions'] == [
            (100, 101, 'warrior', '', ''),
            (100, 102, 'mystic', 'female', 'elf'),
        ]

    def test_second_run_is_idempotent(self, share_dir, engine):
        run_import('en', engine, share_dir=share_dir, max_workers=4)
        first = snapshot(engine)

        report = run_import('en', engine, share_dir=share_dir, max_workers=4)
        assert report.ok
        assert snapshot(engine) == first

    def test_missing_strsheet_directory(self, share_dir, engine):
        shutil.rmtree(os.path.join(share_dir, 'en', 'StrSheet_Item'))

        report = run_import('en', engine, share_dir=share_dir, max_workers=2)

        assert report.ok
        assert report.missing == ['StrSheet']
        rows = snapshot(engine)
        assert rows['strings'] == []
        assert len(rows['templates']) == 3
        assert len(rows['conversions']) == 2
        assert "missing datasets: StrSheet" in report.summary()

    def test_last_data_file_wins(self, share_dir, engine):
        write_xml(
            os.path.join(share_dir, 'en', 'ItemData'), 'ItemData-1.xml',
            '<ItemData><Item id="100" icon="Icon.Other.GIF" rareGrade="5"/></ItemData>'
        )
        run_import('en', engine, share_dir=share_dir, max_workers=2)

        with Session(engine) as session:
            item = session.get(ItemTemplate, 100)
            assert item.icon == 'gif'
            assert item.rare_grade == 5
            assert item.tradable == 0

    def test_invalid_record_reported(self, share_dir, engine):
        write_xml(
            os.path.join(share_dir, 'en', 'ItemData'), 'ItemData-1.xml',
            '<ItemData><Item id="300" icon="Icon.X.DDS" rareGrade="legendary"/></ItemData>'
        )
        report = run_import('en', engine, share_dir=share_dir, max_workers=2)

        assert not report.ok
        assert report.failed == 1
        templates = report.reports[1]
        assert templates.succeeded == 3
        assert templates.errors[0][0] == '300'
        assert "1 failed" in report.summary()

    def test_conversions_differing_only_by_gender_are_kept(self, share_dir, engine):
        write_xml(
            os.path.join(share_dir, 'en', 'ItemConversion'), 'ItemConversion-1.xml',
            '<ItemConversion><Conversion itemTemplateId="500">'
            '<FixedItem templateId="501" gender="male"/>'
            '<FixedItem templateId="501" gender="female"/>'
            '</Conversion></ItemConversion>'
        )
        report = run_import('en', engine, share_dir=share_dir, max_workers=4)

        assert report.reports[2].succeeded == 4
        with Session(engine) as session:
            rows = session.query(ItemConversion).filter(ItemConversion.item_template_id == 500).all()
            assert sorted((r.fixed_item_template_id, r.gender) for r in rows) == [
                (501, 'female'),
                (501, 'male'),
            ]

        run_import('en', engine, share_dir=share_dir, max_workers=4)
        with Session(engine) as session:
            assert session.query(ItemConversion).count() == 4

    def test_malformed_xml_aborts_before_writes(self, share_dir, engine):
        write_xml(
            os.path.join(share_dir, 'en', 'ItemConversion'), 'ItemConversion-1.xml',
            '<ItemConversion><Conversion itemTemplateId="1"></ItemConversion>'
        )
        with pytest.raises(etree.XMLSyntaxError):
            run_import('en', engine, share_dir=share_dir)

        assert snapshot(engine) == {'strings': [], 'templates': [], 'conversions': []}

    def test_strings_tagged_with_language(self, share_dir, engine):
        shutil.copytree(os.path.join(share_dir, 'en'), os.path.join(share_dir, 'de'))
        run_import('en', engine, share_dir=share_dir, max_workers=2)
        run_import('de', engine, share_dir=share_dir, max_workers=2)

        with Session(engine) as session:
            assert session.query(ItemString).count() == 6
            assert session.query(ItemTemplate).count() == 3

    def test_unreachable_database(self, share_dir, tmp_path):
        from sqlalchemy.exc import OperationalError

        engine = create_engine(f"sqlite:///{tmp_path / 'no' / 'such' / 'dir.db'}")
        with pytest.raises(OperationalError):
            run_import('en', engine, share_dir=share_dir)
        engine.dispose()

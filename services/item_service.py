from sqlalchemy.orm import Session
from models import ItemString, ItemTemplate, ItemConversion

class ItemService:
    def __init__(self, session: Session):
        self.session = session

    def get_languages(self):
        """Returns the languages that have at least one item string."""
        rows = self.session.query(ItemString.language).distinct().order_by(ItemString.language).all()
        return [r.language for r in rows]

    def get_items(self, language, limit=100, offset=0):
        """Returns (template, string or None) pairs ordered by template id."""
        return (
            self.session.query(ItemTemplate, ItemString)
            .outerjoin(
                ItemString,
                (ItemString.item_template_id == ItemTemplate.item_template_id)
                & (ItemString.language == language)
            )
            .order_by(ItemTemplate.item_template_id)
            .limit(limit)
            .offset(offset)
            .all()
        )

    def get_template(self, template_id):
        return self.session.get(ItemTemplate, template_id)

    def get_string(self, template_id, language):
        return self.session.get(ItemString, (language, template_id))

    def get_conversions(self, template_id):
        """Returns the conversions of one template, ordered by their key."""
        return (
            self.session.query(ItemConversion)
            .filter(ItemConversion.item_template_id == template_id)
            .order_by(
                ItemConversion.fixed_item_template_id,
                ItemConversion.class_,
                ItemConversion.gender,
                ItemConversion.race,
            )
            .all()
        )

    def get_minimal_item(self, template, string=None):
        """Returns the list representation of one item."""
        return {
            'id': template.item_template_id,
            'name': string.string if string else None,
            'icon': template.icon,
            'rareGrade': template.rare_grade,
            'requiredLevel': template.required_level,
        }

    def get_conversion_dict(self, conversion):
        return {
            'itemTemplateId': conversion.item_template_id,
            'fixedItemTemplateId': conversion.fixed_item_template_id,
            'class': conversion.class_ or None,
            'gender': conversion.gender or None,
            'race': conversion.race or None,
        }

    def get_item_detail(self, template_id, language):
        """
        Returns the full representation of one item in ``language``,
        or None when the id is unknown to both templates and strings.
        """
        template = self.get_template(template_id)
        string = self.get_string(template_id, language)
        if template is None and string is None:
            return None

        detail = {
            'id': template_id,
            'language': language,
            'name': string.string if string else None,
            'toolTip': string.tool_tip if string else None,
            'conversions': [self.get_conversion_dict(c) for c in self.get_conversions(template_id)],
        }
        if template is not None:
            detail.update({
                'icon': template.icon,
                'rareGrade': template.rare_grade,
                'requiredLevel': template.required_level,
                'requiredClass': template.required_class,
                'requiredGender': template.required_gender,
                'requiredRace': template.required_race,
                'tradable': bool(template.tradable),
                'warehouseStorable': bool(template.warehouse_storable),
            })
        return detail

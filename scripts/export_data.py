import argparse
import json
import os
import sys

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import get_engine, get_session_factory
from services import ItemService

PAGE_SIZE = 500

def export_to_static(language, data_dir=os.path.join('static', 'data'), db_url=None):
    engine = get_engine(db_url)
    Session = get_session_factory(engine)
    session = Session()
    service = ItemService(session)

    # Ensure output directory exists
    os.makedirs(data_dir, exist_ok=True)

    print(f"Exporting items for '{language}'...")
    items = []
    offset = 0
    while True:
        page = service.get_items(language, limit=PAGE_SIZE, offset=offset)
        if not page:
            break
        for template, _ in page:
            items.append(service.get_item_detail(template.item_template_id, language))
        offset += PAGE_SIZE

    path = os.path.join(data_dir, f'items_{language}.json')
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(items, f, ensure_ascii=False)

    session.close()
    engine.dispose()
    print(f"Export complete. {len(items)} items saved to {path}")
    return path

if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Export one language's item catalogue to JSON.")
    parser.add_argument('language')
    parser.add_argument('--out', default=os.path.join('static', 'data'))
    parser.add_argument('--db-url', default=None)
    args = parser.parse_args()
    export_to_static(args.language, args.out, args.db_url)

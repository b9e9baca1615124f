from flask import Flask, request, jsonify, abort, g
from models import get_engine, get_session_factory
from services import ItemService

DEFAULT_LANGUAGE = 'en'
DEFAULT_LIMIT = 100
MAX_LIMIT = 500


def create_app(db_url=None):
    app = Flask(__name__)

    # Initialize DB connection factory
    engine = get_engine(db_url)
    app.config['ENGINE'] = engine
    SessionLocal = get_session_factory(engine)

    # Request Context Config
    @app.before_request
    def get_db():
        if 'db' not in g:
            g.db = SessionLocal()

    @app.teardown_request
    def close_db(e=None):
        db = g.pop('db', None)
        if db is not None:
            db.close()

    @app.errorhandler(400)
    @app.errorhandler(404)
    def json_error(e):
        return jsonify({'error': e.description}), e.code

    def get_service():
        return ItemService(g.db)

    def int_arg(name, default, minimum, maximum=None):
        raw = request.args.get(name)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError:
            abort(400, description=f"'{name}' must be an integer")
        if value < minimum or (maximum is not None and value > maximum):
            abort(400, description=f"'{name}' out of range")
        return value

    @app.route('/api/languages')
    def api_languages():
        return jsonify(get_service().get_languages())

    @app.route('/api/items')
    def api_items():
        language = request.args.get('language', DEFAULT_LANGUAGE)
        limit = int_arg('limit', DEFAULT_LIMIT, 1, MAX_LIMIT)
        offset = int_arg('offset', 0, 0)

        service = get_service()
        items = service.get_items(language, limit=limit, offset=offset)
        return jsonify([service.get_minimal_item(t, s) for t, s in items])

    @app.route('/api/items/<int:template_id>')
    def api_item(template_id):
        language = request.args.get('language', DEFAULT_LANGUAGE)
        detail = get_service().get_item_detail(template_id, language)
        if detail is None:
            abort(404, description=f"Item {template_id} not found")
        return jsonify(detail)

    @app.route('/api/items/<int:template_id>/conversions')
    def api_item_conversions(template_id):
        service = get_service()
        return jsonify([service.get_conversion_dict(c) for c in service.get_conversions(template_id)])

    return app


if __name__ == '__main__':
    create_app().run(debug=True, port=5000)

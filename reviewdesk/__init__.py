import os
from flask import Flask, jsonify, request
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from .extensions import db, login_manager, rq
from .errors import ReviewDeskError

migrate = Migrate()

JSON_PREFIXES = ("/api/", "/auth/")


def create_app(config_object='config.Config'):
    """App factory.

    Blueprints: ``/auth`` (session login), ``/api/reviews`` and
    ``/api/comments``. Tables are created on startup unless SKIP_CREATE_ALL
    is set (alembic runs set it).
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    rq.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        try:
            return User.query.filter_by(id=int(user_id)).first()
        except (TypeError, ValueError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"success": False, "error": "Authentication required"}), 401

    @app.errorhandler(ReviewDeskError)
    def handle_app_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        if not request.path.startswith(JSON_PREFIXES):
            return err
        return jsonify({"success": False, "error": err.description}), err.code

    from .blueprints.auth import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")

    from .blueprints.reviews import bp as reviews_bp
    app.register_blueprint(reviews_bp, url_prefix="/api/reviews")

    from .blueprints.comments import bp as comments_bp
    app.register_blueprint(comments_bp, url_prefix="/api/comments")

    if not os.getenv("SKIP_CREATE_ALL"):
        with app.app_context():
            from . import models  # noqa: F401
            db.create_all()

    @app.get('/health')
    def health():
        return jsonify({"ok": True})

    return app

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from sexed.config import Config
from sexed.extensions import db, migrate
from sexed.utils.errors import APIError

API_PREFIX = "/api"


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL missing!")

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # ================= CORS =================
    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        expose_headers=["Content-Length"],
        max_age=600,
    )

    # ================= EXTENSIONS =================
    db.init_app(app)
    migrate.init_app(app, db)

    # Registers the tables with SQLAlchemy's metadata
    from sexed import models  # noqa: F401

    _register_error_handlers(app)
    _register_blueprints(app)

    @app.route("/")
    def home():
        return jsonify({"status": "Sexual health education API running"})

    @app.route("/routes")
    def list_routes():
        return "\n".join(
            sorted(rule.rule for rule in app.url_map.iter_rules())
        )

    return app


def _register_blueprints(app):
    from sexed.routes.auth import auth_bp
    from sexed.routes.chatbot import chatbot_bp
    from sexed.routes.community import community_bp
    from sexed.routes.feedback import feedback_bp
    from sexed.routes.modules import modules_bp
    from sexed.routes.progress import progress_bp
    from sexed.routes.qa import qa_bp
    from sexed.routes.resources import resources_bp
    from sexed.routes.stats import stats_bp
    from sexed.routes.system import system_bp

    app.register_blueprint(auth_bp, url_prefix=f"{API_PREFIX}/auth")
    app.register_blueprint(resources_bp, url_prefix=f"{API_PREFIX}/resources")
    app.register_blueprint(modules_bp, url_prefix=f"{API_PREFIX}/modules")
    app.register_blueprint(progress_bp, url_prefix=f"{API_PREFIX}/course-progress")
    app.register_blueprint(community_bp, url_prefix=f"{API_PREFIX}/community")
    app.register_blueprint(qa_bp, url_prefix=f"{API_PREFIX}/qa")
    app.register_blueprint(stats_bp, url_prefix=f"{API_PREFIX}/stats")
    app.register_blueprint(chatbot_bp, url_prefix=f"{API_PREFIX}/chatbot")
    app.register_blueprint(feedback_bp, url_prefix=f"{API_PREFIX}/feedback")
    app.register_blueprint(system_bp, url_prefix=API_PREFIX)


def _register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"success": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        app.logger.exception("❌ Unhandled error: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500

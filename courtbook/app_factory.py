'''
Flask assembly: builds the app from a Settings object, binds the database,
registers blueprints and error handlers. Does not start a server;
run.py, a WSGI server or the test suite call create_app().
'''
# courtbook/app_factory.py
from typing import Callable, Optional
from datetime import datetime

from flask import Flask, jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

from courtbook.config import Settings
from courtbook.db import session as db_session
from courtbook.errors import CourtBookError
from courtbook.logger import get_logger
from courtbook.services.email_service import EmailSender

logger = get_logger(__name__)


def create_app(
    settings: Settings,
    *,
    email_sender=None,
    clock: Optional[Callable[[], datetime]] = None,
):
    """Application factory."""
    app = Flask(__name__)

    app.config['SECRET_KEY'] = settings.jwt_secret
    app.json.ensure_ascii = False
    app.json.sort_keys = False
    app.config['COURTBOOK_SETTINGS'] = settings
    app.config['COURTBOOK_CLOCK'] = clock
    app.extensions['courtbook.email_sender'] = email_sender or EmailSender(settings)

    db_session.configure(settings.database_url)

    from courtbook.routes import context
    from courtbook.routes.auth import auth_bp
    from courtbook.routes.requests import requests_bp
    from courtbook.routes.admin import admin_bp
    from courtbook.routes.guard import guard_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(requests_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(guard_bp)

    app.teardown_appcontext(context.close_db_session)

    @app.route('/health')
    def health():
        return jsonify({"status": "ok", "message": "API está funcionando"})

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    @app.errorhandler(CourtBookError)
    def handle_domain_error(error: CourtBookError):
        if error.status_code >= 500:
            logger.error("%s: %s", error.error_type.value, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(PydanticValidationError)
    def handle_input_error(error: PydanticValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in e["loc"]),
                "message": e["msg"],
            }
            for e in error.errors()
        ]
        return jsonify({"message": "Erro de validação", "error": "VALIDATION_ERROR", "details": details}), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"message": error.description, "error": error.name}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": "Erro interno do servidor"}), 500

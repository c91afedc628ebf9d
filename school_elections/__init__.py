# school_elections/__init__.py

import os

from flask import Flask, jsonify
from flask_limiter import Limiter
from flask_limiter.errors import RateLimitExceeded
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from school_elections.config import Config
from school_elections.logging_config import configure_logging

# Extensions live at module level and bind to an app in create_app(); the
# engine and its pool belong to that app and go away with it.
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(key_func=get_remote_address)

MIGRATIONS_DIR = os.path.join(os.path.dirname(__file__), 'database', 'migrations')


def create_app(config_overrides=None):
    overrides = dict(config_overrides or {})
    public_dir = os.path.abspath(overrides.get('PUBLIC_DIR', Config.PUBLIC_DIR))

    app = Flask(__name__, static_folder=public_dir, static_url_path='')
    app.config.from_object(Config)
    app.config.update(overrides)
    if not app.config.get('AUDIT_SECRET_KEY'):
        app.config['AUDIT_SECRET_KEY'] = app.config['SECRET_KEY']

    configure_logging(app.config['LOG_LEVEL'])
    if app.config['SECRET_KEY'] == 'change-me-in-production' and not app.testing:
        app.logger.warning("SECRET_KEY is the built-in default; set it before election day")

    # Render and similar hosts terminate TLS at a proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)
    limiter.init_app(app)

    # Imported here so the models register on db.metadata before create_all
    from school_elections.database import models  # noqa: F401
    from school_elections.audit.audit_logger import AuditLogger
    from school_elections.security.audit_tags import AuditTagger

    app.extensions['audit_tagger'] = AuditTagger(app.config['AUDIT_SECRET_KEY'])
    app.extensions['audit_logger'] = AuditLogger(
        log_dir=app.config['AUDIT_LOG_DIR'],
        signing_key=app.config.get('AUDIT_SIGNING_KEY'),
    )

    from school_elections.routes import api, site
    app.register_blueprint(api)
    app.register_blueprint(site)

    from school_elections.cli import register_commands
    register_commands(app)

    _register_error_handlers(app)
    _register_security_headers(app)
    return app


def _register_error_handlers(app):
    from school_elections.errors import ElectionError, InternalError

    @app.errorhandler(ElectionError)
    def election_error(e):
        # failures are part of the protocol, not HTTP errors
        return jsonify(e.to_dict()), 200

    @app.errorhandler(RateLimitExceeded)
    def rate_limited(e):
        body = {'ok': False, 'error': 'Demasiados intentos, espera un momento', 'code': 'RateLimited'}
        return jsonify(body), 429

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", e)
        return jsonify(InternalError().to_dict()), 200


def _register_security_headers(app):
    @app.after_request
    def set_headers(response):
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'no-referrer')
        return response

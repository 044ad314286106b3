"""
Application factory for the Hospital Staff Scheduler.

Builds Flask application instances for the development, testing and
production configurations.
"""
import os
from flask import Flask

from .config import get_config
from .extensions import db, migrate, csrf, limiter


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name: Configuration name (development, testing, production)
                    If None, determined from environment

    Returns:
        Flask application instance
    """
    app = Flask(__name__)

    # Behind Nginx: trust one proxy hop for client IP (rate limiting) and scheme
    from werkzeug.middleware.proxy_fix import ProxyFix
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    config_class = get_config(config_name, validate=(config_name == 'production'))
    app.config.from_object(config_class)

    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    os.makedirs(os.path.join(basedir, "instance"), exist_ok=True)

    # Relative sqlite paths resolve against the project root
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///instance/'):
        db_file = app.config['SQLALCHEMY_DATABASE_URI'][len('sqlite:///instance/'):]
        app.config['SQLALCHEMY_DATABASE_URI'] = f'sqlite:///{os.path.join(basedir, "instance", db_file)}'

    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    limiter.init_app(app)

    # Enable foreign key constraints for SQLite
    from sqlalchemy import event
    from sqlalchemy.engine import Engine

    @event.listens_for(Engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        """Enable foreign key constraints for SQLite connections"""
        if 'sqlite' in type(dbapi_conn).__module__:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    from hsm.error_handlers import setup_logging, register_error_handlers
    setup_logging(app)
    register_error_handlers(app)

    from hsm.models import init_models, model_registry
    models = init_models(db)
    model_registry.init_app(app)
    model_registry.register(models)

    register_blueprints(app)

    app.logger.info(f"Hospital Staff Scheduler started ({config_class.__name__})")
    return app


def register_blueprints(app):
    """Register all application blueprints"""
    from hsm.routes import shift_assignments_bp, conventions_bp, health_bp

    app.register_blueprint(shift_assignments_bp)
    app.register_blueprint(conventions_bp)
    app.register_blueprint(health_bp)

    # JSON API authenticated by the gateway header, not by session cookies
    csrf.exempt(shift_assignments_bp)
    csrf.exempt(conventions_bp)

    # Probes are polled by the orchestrator
    limiter.exempt(health_bp)


def init_db(app):
    """Create all tables (development convenience; production uses migrations)"""
    with app.app_context():
        db.create_all()

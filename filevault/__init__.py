from flask import Flask
from .config import Config
from .config_security import SecurityConfig
from .extensions import db, jwt, migrate, cors
from .routes import register_blueprints, register_error_handlers
from .cli import register_commands
from .tasks.reconciliation import init_reconciliation


def create_app(config_class=Config, storage=None):
    """
    Build the application. `storage` is the object store used by the upload
    handlers; an S3Storage is created from the config when none is given.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel((app.config.get('LOG_LEVEL') or SecurityConfig.get_log_level()).upper())

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/*": {"origins": SecurityConfig.get_allowed_origins()}})

    if storage is None:
        from .services.storage_service import S3Storage
        storage = S3Storage.from_app_config(app)
    app.extensions['object_storage'] = storage

    # Make models known to SQLAlchemy and Flask-Migrate
    from . import models  # noqa: F401

    # Register blueprints (routes)
    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    init_reconciliation(app)

    return app
